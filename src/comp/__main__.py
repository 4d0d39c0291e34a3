## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# comp — A command interpreter for reverse Polish notation, with functions and conditionals.
#

import sys
import time
import textwrap
import traceback
from dataclasses import dataclass

import click

from .errors import CompError, CompParseError, CompStackError, CompValueError, CompNameError, CompControlError, CompConfigError
from .parser import parse, tokenize_arguments, format_parse_error_context, format_token_context, format_token_location
from .formatting import write_without_ansi, show_stack
from .config import Config, load_config

from . import api


VERSION = '0.9.0'
EXIT_FAILURE = 99


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    stats: bool
    plain: bool
    config_path: str | None


@dataclass
class ExecutionItem:
    source: str
    filename: str
    tokens: list | None = None


class CompRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = api._RUNTIME
        self.runtime.config = self._load_config(config.config_path)
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.sources: dict[str, str] = {}

    def _load_config(self, path):
        try:
            return load_config(path)
        except CompConfigError as exc:
            print(f"  \033[1;33mwarning\033[0m: configuration file [\033[97m{exc.filename}\033[0m] (ignored) {exc}", file=sys.stderr)
            return Config()

    def _fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '') -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    def _error_context(self, exc: CompError) -> str:
        token = exc.comp_token
        lines = []
        if (location := format_token_location(token)):
            lines.append(f"\033[90m  {location}\033[0m")
        if (source := format_token_context(token, self.sources)):
            lines.append(source)
        if exc.comp_stack is not None:
            stack = ' '.join(str(s) for s in exc.comp_stack) or '∅'
            lines.append(f"\033[1;33m  Stack content is\033[0;33m\n    {stack}\033[0m\n")
        return '\n'.join(lines)

    def _handle_exception(self, exc) -> None:
        if isinstance(exc, CompParseError):
            source = self.sources.get(exc.filename, '')
            context = format_parse_error_context(exc.filename, exc.line, exc.column, exc.token or '', source=source)
            context += f"\n\033[90m{str(exc).replace(chr(10), ' ').replace(chr(9), ' ')}\033[0m\n"
            self._fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{exc.filename}\033[0m` caused a problem!", type(exc).__name__, context)

        banners = ((CompStackError, "STACK ERROR."), (CompValueError, "VALUE ERROR."),
                   (CompNameError, "NAME ERROR."), (CompControlError, "CONTROL FLOW ERROR."))
        for cls, banner in banners:
            if isinstance(exc, cls):
                detail = f"Operation \033[1;97m`{exc.comp_token}`\033[0m failed: {exc}"
                self._fatal_error(banner, detail, type(exc).__name__, self._error_context(exc))

        print(f'\033[30;43m RUNTIME ERROR. \033[0m Operation \033[1;97m`{getattr(exc, "comp_token", None)}`\033[0m '
              f'caused an error in interpret! (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
        traceback.print_exc()
        sys.exit(EXIT_FAILURE)

    def read_file(self, path: str) -> ExecutionItem:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return ExecutionItem(f.read(), path)
        except (OSError, UnicodeDecodeError) as exc:
            detail = f"Reading `\033[97m{path}\033[0m` failed: {getattr(exc, 'strerror', None) or exc}"
            self._fatal_error("FILE ERROR.", detail, type(exc).__name__)

    def execute_items(self, items: list[ExecutionItem]) -> list[str]:
        try:
            tokens = []
            for item in items:
                self.sources[item.filename] = item.source
                tokens += item.tokens if item.tokens is not None else parse(item.source, filename=item.filename)
            interp = self.runtime.interpreter(tokens)
            interp.run(verbosity=self.verbose, stats=self.total_stats)
        except (CompError, Exception) as exc:
            self._handle_exception(exc)

        config = self.runtime.config
        show_stack(interp.stack, show_level=config.show_stack_level, monochrome=config.monochrome or self.plain)
        return interp.stack

    def finalize(self) -> int:
        if self.total_stats:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 0


def _commands_epilog() -> str:
    names = ' '.join(api._RUNTIME.library.names())
    return "\b\nCommands:\n" + '\n'.join(textwrap.wrap(names, width=76, initial_indent='  ', subsequent_indent='  '))


@click.command(context_settings={'help_option_names': ['-h', '--help']}, epilog=_commands_epilog())
@click.option('--file', '-f', 'file', default=None, metavar='PATH', help='Read operations from a file, before any given as arguments.')
@click.option('--config', 'config_path', default=None, metavar='PATH', help='Configuration file, instead of $COMP_CONFIG or ~/comp.toml.')
@click.option('--verbose', '-v', default=0, count=True, help='Enable verbose interpreter execution.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.version_option(VERSION, prog_name='comp')
@click.argument('ops', nargs=-1)
@click.pass_context
def cli(ctx: click.Context, file: str | None, config_path: str | None, verbose: int, stats: bool, plain: bool, ops: tuple[str, ...]) -> None:
    """Evaluate OPS, a program in reverse Polish notation, and print the resulting stack."""
    if file is None and (not ops or ops == ('help',)):
        click.echo(ctx.get_help())
        ctx.exit(0)
    if file is None and ops == ('version',):
        click.echo(f"comp, version {VERSION}")
        ctx.exit(0)

    runner = CompRunner(RuntimeConfig(verbose=verbose, stats=stats, plain=plain, config_path=config_path))
    items = [runner.read_file(file)] if file is not None else []
    if ops:
        items.append(ExecutionItem(' '.join(ops), '<args>', tokenize_arguments(ops)))
    runner.execute_items(items)
    ctx.exit(runner.finalize())


FLAGS = ('--stats', '--plain', '-p', '--version', '--help', '-h', '--verbose')
OPTIONS = ('--file', '-f', '--config')


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    # Separate options from operations, since `-`, `--` and negative numbers are valid operations.
    g, r, i = [], [], 0
    while i < len(a):
        t = a[i]
        if t in FLAGS or (t.startswith('-v') and set(t[1:]) == {'v'}) or t.startswith(tuple(o + '=' for o in OPTIONS)):
            g.append(t)
        elif t in OPTIONS and i + 1 < len(a):
            g += [t, a[i+1]]
            i += 1
        else:
            r.append(t)
        i += 1

    cli.main(args=[*g, '--', *r], prog_name='comp')


if __name__ == "__main__":
    main()
