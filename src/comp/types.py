## comp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from typing import Any, Callable
from dataclasses import dataclass


class Token(str):
    """Program text for one operation, remembering where it was read from."""

    def __new__(cls, value: str, meta: dict | None = None):
        self = super().__new__(cls, value)
        self.meta = meta or {}
        return self

    def __repr__(self):
        return f"Token({str.__repr__(self)})"


@dataclass(frozen=True)
class Function:
    name: str
    fops: tuple                   # captured tokens, in execution order


class Operation:
    """A token resolved against the interpreter state, at the moment it is dispatched."""
    COMMAND = 1
    FUNCTION = 2
    MEMORY = 3
    LITERAL = 4

    def __init__(self, type, ptr, name):
        self.type = type
        self.ptr = ptr
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Operation) and self.type == other.type and self.ptr == other.ptr

    def __hash__(self):
        return hash((self.type, self.name))

    def __repr__(self):
        return f"{self.name}"


## VALUE KINDS
# Annotating a leaf command's parameters with one of these selects how each
# stack token is parsed before the call.

def parse_float(token: str) -> float:
    # Python also accepts digit separators and padding, which are not valid tokens here.
    if '_' in token or token != token.strip():
        raise ValueError(token)
    return float(token)


class RadixInt(int):
    base: int = 10
    bits: int = 64
    signed: bool = False
    label: str = 'u'

    @classmethod
    def parse(cls, token: str) -> int:
        digits = '01' if cls.base == 2 else '0-9a-fA-F' if cls.base == 16 else '0-9'
        sign = '[+-]?' if cls.signed else r'\+?'
        if not re.fullmatch(f"{sign}[{digits}]+", token):
            raise ValueError(token)
        value = int(token, cls.base)
        lo, hi = (-2**(cls.bits-1), 2**(cls.bits-1) - 1) if cls.signed else (0, 2**cls.bits - 1)
        if not (lo <= value <= hi):
            raise ValueError(token)
        return value

class UInt(RadixInt):
    """Unsigned 64-bit decimal integer."""

class Byte(RadixInt):
    bits = 8

class Hex(RadixInt):
    """Signed 64-bit integer written in base 16, without prefix."""
    base, signed, label = 16, True, 'i_h'

class HexByte(RadixInt):
    base, bits, label = 16, 8, 'i_h'

class Bin(RadixInt):
    base, signed, label = 2, True, 'i_b'


VALUE_PARSERS: dict[type, Callable[[str], Any]] = {
    float: parse_float,
    str: str,
    UInt: UInt.parse, Byte: Byte.parse,
    Hex: Hex.parse, HexByte: HexByte.parse,
    Bin: Bin.parse,
}

def value_label(kind: type) -> str:
    """Short tag naming the expected kind in parse errors."""
    return {float: 'f', str: 's'}.get(kind) or kind.label
