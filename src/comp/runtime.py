## comp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

from .config import Config
from .parser import parse
from .library import Library
from .builtins import load_builtins_library
from .interpreter import Interpreter


class Runtime:
    """Minimal runtime facade focused on embedding and extension."""

    def __init__(self, library: Library | None = None, config: Config | None = None):
        self.library = library or load_builtins_library()
        self.config = config or Config()

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def interpreter(self, tokens=()) -> Interpreter:
        return Interpreter(self.library, config=self.config, tokens=tokens)

    def execute(self, source: str, filename: str | None = None, verbosity: int = 0, stats: dict | None = None) -> Interpreter:
        interp = self.interpreter(parse(source, filename=filename))
        interp.run(verbosity=verbosity, stats=stats)
        return interp

    def run(self, source: str, filename: str | None = None, verbosity: int = 0, stats: dict | None = None) -> list[str]:
        return [str(s) for s in self.execute(source, filename, verbosity, stats).stack]

    def apply(self, name: str, stack: list) -> list[str]:
        """Execute a single operation against a copy of `stack`, given bottom to top."""
        interp = self.interpreter([name])
        interp.stack = [str(s) for s in stack]
        return interp.run()

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_operation(self, name: str, func: Callable) -> None:
        self.library.add_function(name, func)

    def register_combinator(self, name: str, func: Callable) -> None:
        self.library.add_combinator(name, func)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def get_signature(self, name: str) -> dict | None:
        return self.library.get_signature(name)

    def list_operations(self) -> dict[str, dict]:
        return {n: fn.__comp_meta__ for n, fn in self.library.functions.items()}
