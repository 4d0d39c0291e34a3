## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from functools import reduce

from .types import Operation, Function
from .errors import CompNameError, CompUnterminatedFunction, CompUnterminatedConditional, CompUnterminatedComment
from .operators import _fmax, _fmin
from .formatting import format_value


## STACK
def comb_drop(this: Operation, interp):
    if not interp.stack:
        interp.warn(f"[{this.name}] operation called on empty stack")
        return
    interp.stack.pop()

def comb_dup(this: Operation, interp):
    interp.check_stack_error(1, this.name)
    interp.stack.append(interp.stack[-1])

def comb_swap(this: Operation, interp):
    interp.check_stack_error(2, this.name)
    interp.stack[-1], interp.stack[-2] = interp.stack[-2], interp.stack[-1]

def comb_cls(this: Operation, interp):
    interp.stack.clear()

def comb_roll(this: Operation, interp):
    """Moves the top of the stack to the bottom."""
    interp.check_stack_error(1, this.name)
    interp.stack.insert(0, interp.stack.pop())

def comb_rot(this: Operation, interp):
    """Moves the bottom of the stack to the top, the reverse of `roll`."""
    interp.check_stack_error(1, this.name)
    interp.stack.append(interp.stack.pop(0))


## REDUCTIONS
def _fold_pairs(interp, fn):
    while len(interp.stack) > 1:
        b, a = interp.pop_float(), interp.pop_float()
        interp.push(fn(a, b))

def comb_add_all(this: Operation, interp):
    _fold_pairs(interp, lambda a, b: a + b)

def comb_mul_all(this: Operation, interp):
    _fold_pairs(interp, lambda a, b: a * b)

def _pop_all(interp) -> list[float]:
    return [interp.pop_float() for _ in range(len(interp.stack))]

def comb_max_all(this: Operation, interp):
    interp.check_stack_error(2, this.name)
    interp.push(reduce(_fmax, _pop_all(interp)))

def comb_min_all(this: Operation, interp):
    interp.check_stack_error(1, this.name)
    interp.push(reduce(_fmin, _pop_all(interp)))

def comb_avg_all(this: Operation, interp):
    interp.check_stack_error(2, this.name)
    values = _pop_all(interp)
    interp.push(sum(values) / len(values))


## MEMORY
def comb_store_slot(this: Operation, interp):
    """Pops a number into the slot named by the command, `sa` stores into `a`."""
    interp.check_stack_error(1, this.name)
    interp.slots[this.name[-1]] = format_value(interp.pop_float())

def comb_push_slot(this: Operation, interp):
    interp.stack.append(interp.slots[this.name[-1]])

def comb_store(this: Operation, interp):
    """Pops the top value and stores it under the name that follows: `5 store x`."""
    interp.check_stack_error(1, this.name)
    key = interp.take(CompNameError, f"[{this.name}] operation must be followed by a name")
    interp.memory[key] = interp.pop_string()

def comb_recall(this: Operation, interp):
    key = interp.take(CompNameError, f"[{this.name}] operation must be followed by a name")
    if key not in interp.memory:
        raise CompNameError(f"[{key}] is not a stored name", comp_token=key)
    interp.stack.append(interp.memory[key])


## OUTPUT & CONFIGURATION
def comb_println(this: Operation, interp):
    interp.check_stack_error(1, this.name)
    print(interp.pop_string())

def comb_conversion_constant(this: Operation, interp):
    interp.check_stack_error(1, this.name)
    interp.push(interp.pop_float() * interp.config.conversion_constant)


## CONTROL FLOW
def _capture(interp, terminator: str) -> tuple:
    # Stops at the first terminator, definitions do not nest.
    body = []
    while (token := interp.take(CompUnterminatedFunction)) != terminator:
        body.append(token)
    return tuple(body)

def comb_function(this: Operation, interp):
    """Defines a named function from the tokens up to `)`: `( sq dup x )`."""
    name = interp.take(CompUnterminatedFunction)
    interp.functions[name] = Function(name, _capture(interp, ')'))

def comb_lambda(this: Operation, interp):
    """Defines the anonymous function `_` from the tokens up to `]`, replacing any previous one."""
    interp.functions.pop('_', None)
    interp.functions['_'] = Function('_', _capture(interp, ']'))

def comb_comment(this: Operation, interp):
    nested = 0
    while True:
        token = interp.take(CompUnterminatedComment)
        if token == '{':
            nested += 1
        elif token == '}':
            if nested == 0: return
            nested -= 1


def _scan_branch(interp, keep: bool, stops: tuple[str, ...]) -> tuple[list, str]:
    """Consume tokens up to one of `stops` at depth zero, returning those kept and the marker found."""
    body, depth = [], 0
    while True:
        token = interp.take(CompUnterminatedConditional)
        if depth == 0 and token in stops:
            return body, token
        if token == 'ifeq':
            depth += 1
        elif token == 'fi':
            depth -= 1
        if keep:
            body.append(token)

def comb_ifeq(this: Operation, interp):
    """Runs the tokens up to `else` when the two top numbers are equal, otherwise those between
    `else` and `fi`.  The branch taken is put back in the queue, the other one is discarded.
    """
    interp.check_stack_error(2, this.name)
    b, a = interp.pop_float(), interp.pop_float()

    body, marker = _scan_branch(interp, keep=(a == b), stops=('else', 'fi'))
    if marker == 'else':
        rest, _ = _scan_branch(interp, keep=(a != b), stops=('fi',))
        body += rest
    interp.inject(body)


def _require_lambda(this: Operation, interp):
    if '_' not in interp.functions:
        raise CompNameError(f"[{this.name}] operation called without a lambda function defined")

def comb_map(this: Operation, interp):
    """Applies the lambda to every element of the stack, from bottom to top."""
    interp.check_stack_error(1, this.name)
    _require_lambda(this, interp)
    interp.inject(['rot', '_'] * len(interp.stack))

def comb_fold(this: Operation, interp):
    """Reduces the stack to a single element with the lambda, from bottom to top."""
    interp.check_stack_error(3, this.name)
    _require_lambda(this, interp)
    interp.inject(['rot', '_'] * (len(interp.stack) - 1))

def comb_scan(this: Operation, interp):
    """Like `fold`, but keeps every intermediate result on the stack."""
    interp.check_stack_error(1, this.name)
    _require_lambda(this, interp)
    interp.inject(['dup', 'rot', '_'] * (len(interp.stack) - 1))
