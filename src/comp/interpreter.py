## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
import collections

from .types import Operation, Function, UInt, Byte, Hex, HexByte, Bin, VALUE_PARSERS, value_label
from .errors import CompStackError, CompValueError
from .config import Config
from .library import Library
from .formatting import format_value, show_program_and_stack


# Commands that rewrite the queue, shown in the trace at verbosity 1.
CONTROL_COMMANDS = frozenset(('(', '[', '{', 'ifeq', 'map', 'fold', 'scan'))


class Interpreter:
    """Execution context for one program: the pending queue, the value stack, and what it defines."""

    def __init__(self, library: Library, config: Config | None = None, tokens=()):
        self.library = library
        self.config = config or Config()
        self.queue = collections.deque(tokens)
        self.stack: list[str] = []
        self.memory: dict[str, str] = {}
        self.slots = {'a': '0', 'b': '0', 'c': '0'}
        self.functions: dict[str, Function] = {}
        self.current: Operation | None = None
        self.steps = 0

    # Queue ───────────────────────────────────────────────────────────────────────────────────
    def resolve(self, token: str) -> Operation:
        if (handler := self.library.get_command(token)) is not None:
            return Operation(Operation.COMMAND, handler, token)
        if (function := self.functions.get(token)) is not None:
            return Operation(Operation.FUNCTION, function, token)
        if token in self.memory:
            return Operation(Operation.MEMORY, self.memory[token], token)
        return Operation(Operation.LITERAL, token, token)

    def inject(self, tokens) -> None:
        self.queue.extendleft(reversed(tokens))

    def take(self, error_cls, message: str = "") -> str:
        """Remove the next token from the queue, which must not be exhausted."""
        if not self.queue:
            raise error_cls(message)
        return self.queue.popleft()

    # Stack ───────────────────────────────────────────────────────────────────────────────────
    def check_stack_error(self, min_depth: int, command: str) -> None:
        if len(self.stack) < min_depth:
            raise CompStackError(f"[{command}] operation called without at least {min_depth} element(s) on stack")

    def push(self, *values) -> None:
        self.stack.extend(format_value(v) for v in values)

    def pop(self, kind: type = str):
        token = self.stack.pop()
        try:
            return VALUE_PARSERS[kind](token)
        except ValueError:
            raise CompValueError(f"unknown expression [{token}] is not a recognized operation "
                                 f"or valid value ({value_label(kind)})") from None

    def pop_float(self) -> float: return self.pop(float)
    def pop_uint(self) -> int: return self.pop(UInt)
    def pop_byte(self) -> int: return self.pop(Byte)
    def pop_hex(self) -> int: return self.pop(Hex)
    def pop_hex_byte(self) -> int: return self.pop(HexByte)
    def pop_bin(self) -> int: return self.pop(Bin)
    def pop_string(self) -> str: return self.pop(str)

    def warn(self, message: str) -> None:
        if self.config.show_warnings:
            print(f"  \033[1;33mwarning\033[0m: {message}", file=sys.stderr)

    # Dispatch ────────────────────────────────────────────────────────────────────────────────
    def step(self) -> Operation:
        op = self.current = self.resolve(self.queue.popleft())
        match op.type:
            case Operation.COMMAND:
                op.ptr(op, self)
            case Operation.FUNCTION:
                self.inject(op.ptr.fops)
            case Operation.MEMORY:
                self.inject([op.ptr])
            case Operation.LITERAL:
                self.stack.append(op.ptr)
        self.steps += 1
        return op

    def is_notable(self, token: str) -> bool:
        return token in CONTROL_COMMANDS or (token in self.functions and self.library.get_command(token) is None)

    def run(self, verbosity=0, stats=None) -> list[str]:
        start = self.steps
        while self.queue:
            if verbosity == 2 or (verbosity == 1 and (self.is_notable(self.queue[0]) or self.steps == start)):
                print(f"\033[90m{self.steps:>3} :\033[0m  ", end='')
                show_program_and_stack(self.queue, self.stack)

            token, self.current = self.queue[0], None
            try:
                self.step()
            except Exception as exc:
                exc.comp_op = self.current
                exc.comp_token = token
                exc.comp_stack = list(self.stack)
                raise

        if verbosity > 0:
            print(f"\033[90m{self.steps:>3} :\033[0m  ", end='')
            show_program_and_stack(self.queue, self.stack)
        if stats is not None:
            stats['steps'] = stats.get('steps', 0) + self.steps - start

        return [str(s) for s in self.stack]
