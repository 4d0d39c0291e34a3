## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class CompError(Exception):
    def __init__(self, message: str = "", *, comp_op=None, comp_token=None, comp_stack=None):
        """Base class for all errors raised while interpreting a program."""
        super().__init__(message)
        self.comp_op: object = comp_op
        self.comp_token: str = comp_token
        self.comp_stack: list = comp_stack

class CompParseError(CompError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, comp_token=token)
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class CompNameError(CompError, NameError):
    pass

class CompValueError(CompError, ValueError):
    """A popped token could not be read as the kind of value a command needs."""
    pass

class CompStackError(CompError, IndexError):
    """Too few elements on the stack for the command being executed."""
    pass


class CompControlError(CompError, SyntaxError):
    """Malformed control flow, found while consuming the operation queue."""
    construct = "construct"

    def __init__(self, message: str = "", *, comp_op=None, comp_token=None, comp_stack=None):
        super().__init__(message or f"unterminated {self.construct}", comp_op=comp_op, comp_token=comp_token, comp_stack=comp_stack)

class CompUnterminatedFunction(CompControlError):
    construct = "function definition"

class CompUnterminatedConditional(CompControlError):
    construct = "conditional"

class CompUnterminatedComment(CompControlError):
    construct = "comment"


class CompTypeMissing(CompError, TypeError):
    pass

class CompConfigError(CompError):
    def __init__(self, message, *, filename=None):
        super().__init__(message)
        self.filename = filename
