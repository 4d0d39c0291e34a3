## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass, field

from .errors import CompNameError
from .loader import get_stack_effects


@dataclass
class Library:
    functions: dict[str, Callable[..., Any]]
    combinators: dict[str, Callable[..., Any]]
    aliases: dict[str, str] = field(default_factory=dict)

    # Registration helpers
    def add_function(self, name: str, fn: Callable[..., Any]) -> None:
        fn, meta = _make_wrapper(fn, name)
        fn.__comp_meta__ = meta
        self.functions[name] = fn

    def add_combinator(self, name: str, fn: Callable[..., Any]) -> None:
        self.combinators[name] = fn

    def ensure_consistent(self) -> None:
        for _, fn in list(self.functions.items()):
            assert hasattr(fn, '__comp_meta__')
        for alias, target in self.aliases.items():
            assert target in self.functions or target in self.combinators, alias

    def get_command(self, name: str) -> Callable[..., Any] | None:
        """Handler for a command name or one of its aliases, None when it is not a command."""
        resolved_name = self.aliases.get(name, name)
        if (function := self.functions.get(resolved_name)) is not None:
            return function
        return self.combinators.get(resolved_name)

    def get_signature(self, name: str) -> dict | None:
        if (handler := self.get_command(name)) is None:
            raise CompNameError(f"Operation `{name}` not found in library.", comp_token=name)
        return getattr(handler, '__comp_meta__', None)

    def names(self) -> list[str]:
        return sorted({*self.functions, *self.combinators, *self.aliases})


def _make_wrapper(fn: Callable[..., Any], name: str) -> Callable[..., Any]:
    meta = get_stack_effects(fn=fn, name=name)
    arity, inputs = meta['arity'], meta['inputs']

    match meta['valency']:
        case 0:
            def push(interp, _): pass
        case 1:
            def push(interp, res): interp.push(res)
        case _:
            def push(interp, res): interp.push(*res)

    match arity:
        case 0:
            def w_0(this, interp):
                push(interp, fn())
            return w_0, meta
        case 1:
            kind, = inputs
            def w_1(this, interp):
                interp.check_stack_error(1, this.name)
                push(interp, fn(interp.pop(kind)))
            return w_1, meta
        case _:
            def w_x(this, interp):
                interp.check_stack_error(arity, this.name)
                # Top of the stack is parsed first, and bound to the last parameter.
                args = tuple(interp.pop(kind) for kind in inputs)
                push(interp, fn(*reversed(args)))
            return w_x, meta
