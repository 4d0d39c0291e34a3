## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from typing import Callable, get_origin, get_args

from .types import VALUE_PARSERS
from .errors import CompTypeMissing


def _value_kind(annotation, op_name: str, what: str) -> type:
    if annotation not in VALUE_PARSERS:
        raise CompTypeMissing(f"Operation `{op_name}` has unsupported annotation {annotation!r} for {what}.")
    return annotation


def get_stack_effects(*, fn: Callable, name: str = None) -> dict:
    """Parse the type annotations from Python to determine the stack effects of a command.

    Each positional parameter pops one token, parsed as the annotated value kind;
    the top of the stack is bound to the last parameter.

    Valency (output) conventions:
        0: nothing pushed, the function returns None
        1: single output pushed
        >=2: tuple of outputs pushed left to right
    """
    assert fn is not None, "Must specify the function to inspect."

    sig = inspect.signature(fn)
    params = list(sig.parameters.values())
    op_name = name or getattr(fn, '__name__', '<unnamed>')

    if any(p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD) for p in params):
        raise CompTypeMissing(f"Operation `{op_name}` must take a fixed number of parameters, use a combinator instead.")
    positional = [p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)]

    ret_ann = sig.return_annotation
    if ret_ann is inspect.Signature.empty:
        raise CompTypeMissing(f"Operation `{op_name}` must declare a return annotation.")

    missing_inputs = [p.name for p in positional if p.annotation is inspect._empty]
    if missing_inputs:
        missing = ', '.join(missing_inputs)
        raise CompTypeMissing(f"Operation `{op_name}` must annotate parameters: {missing}.")

    returns_none = (ret_ann is type(None) or ret_ann is None)
    returns_tuple = (get_origin(ret_ann) is tuple)

    if returns_none:
        outputs: list = []
    elif returns_tuple:
        outputs = list(get_args(ret_ann))
    else:
        outputs = [ret_ann]

    return {
        'arity': len(positional),
        'valency': len(outputs),
        'inputs': list(reversed([_value_kind(p.annotation, op_name, f"`{p.name}`") for p in positional])),
        'outputs': list(reversed(outputs)),
    }
