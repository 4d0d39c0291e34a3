## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark

from .types import Token
from .errors import CompParseError


# Programs are flat: every whitespace-separated word is one operation.  Only ASCII
# layout characters separate words, other whitespace is rejected with its position.
GRAMMAR = r"""start: WORD*

WORD: /[^\s]+/

WS: /[ \t\f\r\n]+/
%ignore WS
"""

_PARSER = None


def _get_parser() -> lark.Lark:
    global _PARSER
    if _PARSER is None:
        _PARSER = lark.Lark(GRAMMAR, start='start', parser="lalr", lexer="contextual", propagate_positions=True)
    return _PARSER


def parse(source: str, filename=None) -> list[Token]:
    """Split program text into tokens that remember their file, line and column."""
    try:
        tree = _get_parser().parse(source)
    except (lark.exceptions.UnexpectedInput, lark.exceptions.ParseError) as exc:
        def attr(k): return getattr(exc, k, None)
        token_val = getattr(token, 'value', '') if (token := attr('token')) is not None else ''
        if not token_val and (pos := attr('pos_in_stream')) is not None:
            token_val = source[pos:pos+1]
        raise CompParseError(str(exc), filename=filename, line=attr('line'), column=attr('column'), token=token_val) from None

    return [Token(tok.value, {'filename': filename, 'line': tok.line, 'column': tok.column})
            for tok in tree.children if isinstance(tok, lark.Token)]


def tokenize_arguments(args, filename='<args>') -> list[Token]:
    """Each command-line argument is one token, placed as if the arguments were joined by spaces."""
    tokens, column = [], 1
    for arg in args:
        tokens.append(Token(arg, {'filename': filename, 'line': 1, 'column': column}))
        column += len(arg) + 1
    return tokens


def format_token_location(token) -> str:
    meta = getattr(token, 'meta', None)
    if not meta or meta.get('line') is None:
        return ""
    return f"File \"{meta['filename']}\", line {meta['line']}, column {meta['column']}"


def format_parse_error_context(filename, line, column, token_value, source=None):
    lines = source.splitlines(keepends=True) if source is not None else open(filename, 'r').readlines()
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column > 0 and column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+len(token_value)-1]}\033[0m" +
                    line_content[column+len(token_value)-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'


def format_token_context(token, sources: dict[str, str]) -> str:
    """Source excerpt around a token, when the text it came from is still known."""
    meta = getattr(token, 'meta', None) or {}
    if (source := sources.get(meta.get('filename'))) is None or meta.get('line') is None:
        return ""
    return format_parse_error_context(meta['filename'], meta['line'], meta['column'], str(token), source=source)
