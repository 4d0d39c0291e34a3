## comp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from comp.api import Runtime
from comp.errors import (CompStackError, CompNameError, CompControlError,
                         CompUnterminatedFunction, CompUnterminatedConditional, CompUnterminatedComment)

import pytest


def run(source):
    return Runtime().run(source)


## FUNCTIONS
def test_function_definition_and_call():
    assert run("( sq dup x ) 4 sq") == ['16']
    assert run("( sq dup x ) ( quad sq sq ) 2 quad") == ['16']


def test_function_redefinition_replaces_body():
    assert run("( f 1 ) ( f 2 ) f") == ['2']


def test_function_capture_stops_at_first_terminator():
    assert run("( outer ( inner 1 ) 2 )") == ['2', ')']


def test_unterminated_function_definition():
    with pytest.raises(CompUnterminatedFunction, match="unterminated function definition"):
        run("( f 1 2")
    with pytest.raises(CompUnterminatedFunction):
        run("(")
    with pytest.raises(CompControlError):
        run("[ 1 +")


def test_recursive_function():
    assert run("( down dup 0 ifeq else dup -- down fi ) 3 down") == ['3', '2', '1', '0']


## LAMBDAS
def test_lambda_definition_and_call():
    assert run("[ 2 x ] 3 _") == ['6']


def test_lambda_replaces_previous_one():
    assert run("[ 1 ] [ 2 ] _") == ['2']


## COMMENTS
def test_comments_are_skipped():
    assert run("1 { ignore me } 2") == ['1', '2']
    assert run("1 { a { b } c } 2") == ['1', '2']


def test_unterminated_comment():
    with pytest.raises(CompUnterminatedComment):
        run("1 { a")
    with pytest.raises(CompUnterminatedComment):
        run("{ { }")


## CONDITIONALS
def test_conditional_branches():
    assert run("5 5 ifeq 10 else 20 fi") == ['10']
    assert run("5 6 ifeq 10 else 20 fi") == ['20']
    assert run("5 5 ifeq 10 fi") == ['10']
    assert run("5 6 ifeq 10 fi") == []
    assert run("1 1 ifeq 10 else 20 fi 3") == ['10', '3']


def test_conditional_compares_numbers():
    assert run("2 2.0 ifeq 1 else 0 fi") == ['1']
    assert run("0 0 / 0 0 / ifeq 1 else 0 fi") == ['0']


def test_nested_conditional_in_then_branch():
    assert run("1 1 ifeq 2 2 ifeq 100 else 200 fi else 300 fi") == ['100']
    assert run("1 1 ifeq 2 3 ifeq 100 else 200 fi else 300 fi") == ['200']


def test_nested_conditional_in_else_branch():
    assert run("1 2 ifeq 2 2 ifeq 100 else 200 fi else 3 3 ifeq 300 else 400 fi fi") == ['300']
    assert run("1 2 ifeq 0 else 3 4 ifeq 300 else 400 fi 5 fi") == ['400', '5']


def test_conditional_inside_function():
    assert run("( iszero 0 ifeq 1 else 0 fi ) 0 iszero 5 iszero") == ['1', '0']


def test_unterminated_conditional():
    with pytest.raises(CompUnterminatedConditional, match="unterminated conditional"):
        run("1 1 ifeq 2")
    with pytest.raises(CompUnterminatedConditional):
        run("1 2 ifeq 2 else 3")
    with pytest.raises(CompUnterminatedConditional):
        run("1 1 ifeq 1 1 ifeq 2 fi")


def test_conditional_needs_two_values():
    with pytest.raises(CompStackError):
        run("1 ifeq fi")


## COMBINATORS
def test_map_applies_lambda_to_each_element():
    assert run("1 2 3 [ 1 + ] map") == ['2', '3', '4']
    assert run("1 2 3 [ 2 x ] map") == ['2', '4', '6']


def test_map_repeat_count_is_taken_before_execution():
    assert run("1 2 3 [ dup ] map") == ['1', '1', '2', '2', '3', '3']


def test_fold_reduces_stack():
    assert run("1 2 3 [ + ] fold") == ['6']
    assert run("1 2 3 4 [ x ] fold") == ['24']

    with pytest.raises(CompStackError):
        run("1 2 [ + ] fold")


def test_scan_keeps_intermediate_results():
    assert run("1 2 3 [ + ] scan") == ['3', '4', '6']
    assert run("1 [ + ] scan") == ['1']


def test_combinators_need_a_lambda():
    with pytest.raises(CompNameError):
        run("1 2 map")
    with pytest.raises(CompStackError):
        run("[ 1 + ] map")
