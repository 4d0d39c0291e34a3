## comp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from comp.types import Token, Operation, Function, UInt, Byte, Hex, HexByte, Bin, parse_float, value_label


def test_token_is_a_string_with_meta():
    token = Token("dup", {'filename': 'a.comp', 'line': 1, 'column': 1})
    assert token == "dup"
    assert hash(token) == hash("dup")
    assert token.meta['filename'] == 'a.comp'
    assert Token("x").meta == {}


def test_parse_float_accepts_numbers_only():
    assert parse_float("3") == 3.0
    assert parse_float("-2.5e3") == -2500.0
    assert parse_float("inf") == float('inf')
    for bad in ("abc", "1_000", " 1", ""):
        with pytest.raises(ValueError):
            parse_float(bad)


def test_unsigned_kinds_have_ranges():
    assert UInt.parse("18446744073709551615") == 2**64 - 1
    assert Byte.parse("255") == 255
    for kind, bad in ((UInt, "-1"), (UInt, "18446744073709551616"), (UInt, "1.0"), (Byte, "256")):
        with pytest.raises(ValueError):
            kind.parse(bad)


def test_radix_kinds():
    assert Hex.parse("ff") == 255
    assert Hex.parse("-FF") == -255
    assert HexByte.parse("0a") == 10
    assert Bin.parse("-101") == -5
    for kind, bad in ((Hex, "0xff"), (HexByte, "100"), (Bin, "2"), (Bin, "")):
        with pytest.raises(ValueError):
            kind.parse(bad)


def test_value_labels():
    assert [value_label(k) for k in (float, str, UInt, Byte, Hex, HexByte, Bin)] == ['f', 's', 'u', 'u', 'i_h', 'i_h', 'i_b']


def test_operation_equality():
    f = Function('sq', ('dup', 'x'))
    assert Operation(Operation.FUNCTION, f, 'sq') == Operation(Operation.FUNCTION, f, 'sq')
    assert Operation(Operation.LITERAL, '1', '1') != Operation(Operation.MEMORY, '1', '1')
    assert repr(Operation(Operation.COMMAND, None, 'dup')) == 'dup'
