## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math


BLUE, GREEN, CYAN, RESET = '\033[34m', '\033[32m', '\033[36m', '\033[0m'


def format_value(value) -> str:
    """Turn a computed value back into the token that is pushed on the stack."""
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if math.isnan(value): return 'NaN'
        if math.isinf(value): return 'inf' if value > 0 else '-inf'
        if value.is_integer():
            return '-0' if value == 0 and math.copysign(1.0, value) < 0 else str(int(value))
        return repr(value)
    return str(value)


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_stack(stack, show_level=False, monochrome=False) -> list[str]:
    lines = []
    for i, item in enumerate(stack):
        level = len(stack) - i
        color = '' if monochrome else (GREEN if level == 1 else BLUE)
        prefix = f"{level}: " if show_level else ""
        lines.append(f"  {prefix}{color}{item}{RESET if color else ''}")
    return lines

def show_stack(stack, show_level=False, monochrome=False, file=None):
    for line in format_stack(stack, show_level=show_level, monochrome=monochrome):
        print(line, file=file)


def show_program_and_stack(queue, stack, width=72):
    stack_str = ' '.join(str(s) for s in stack) if stack else '∅'
    if len(stack_str) > width:
        stack_str = '… ' + stack_str[-width+2:]
    prog_str = ' '.join(str(p) for p in queue) if queue else '∅'
    if len(prog_str) > width:
        prog_str = prog_str[:+width-2] + ' …'
    print(f"{stack_str:>{width}} {CYAN} <=> {RESET} {prog_str:<{width}}")
