## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
import random

from .types import UInt, Byte, Hex, HexByte, Bin
from .errors import CompValueError


## FLOATING POINT
# Python raises where IEEE arithmetic returns an infinity or NaN, these helpers return the value instead.

def _fdiv(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a): return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b

def _powf(a: float, b: float) -> float:
    odd = b.is_integer() and b % 2 == 1
    if a == 0 and b < 0:
        return math.copysign(math.inf, a) if odd else math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and odd else math.inf
    except ValueError:
        return math.nan

def _domain(fn, x: float) -> float:
    try:
        return fn(x)
    except ValueError:
        return math.nan

def _log(fn, x: float) -> float:
    if x == 0: return -math.inf
    if x < 0: return math.nan
    return fn(x)

def _fmax(a: float, b: float) -> float:
    if math.isnan(a): return b
    if math.isnan(b): return a
    return max(a, b)

def _fmin(a: float, b: float) -> float:
    if math.isnan(a): return b
    if math.isnan(b): return a
    return min(a, b)

def _round(x: float) -> float:
    """Round half away from zero, keeping the sign of negative results."""
    if not math.isfinite(x) or x.is_integer(): return x
    return math.copysign(math.floor(abs(x) + 0.5), x)

def _factorial(x: float) -> float:
    if math.isnan(x): return x
    if math.isinf(x): return x if x > 0 else 1.0
    n, result = math.floor(x), 1.0
    while n >= 2 and not math.isinf(result):
        result *= n
        n -= 1
    return result

def _gcd(a: int, b: int) -> int:
    while b != 0:
        a, b = b, a % b
    return a


## ARITHMETIC
def op_add(b: float, a: float) -> float: return b + a
def op_add_one(x: float) -> float: return x + 1.0
def op_sub(b: float, a: float) -> float: return b - a
def op_sub_one(x: float) -> float: return x - 1.0
def op_mul(b: float, a: float) -> float: return b * a
def op_div(b: float, a: float) -> float: return _fdiv(b, a)
def op_chs(x: float) -> float: return -1.0 * x
def op_abs(x: float) -> float: return abs(x)
def op_round(x: float) -> float: return _round(x)
def op_inv(x: float) -> float: return _fdiv(1.0, x)
def op_sqrt(x: float) -> float: return math.sqrt(x) if x >= 0 else math.nan
def op_throot(b: float, a: float) -> float: return _powf(b, _fdiv(1.0, a))
def op_pow(b: float, a: float) -> float: return _powf(b, a)
def op_mod(b: float, a: float) -> float: return _domain(lambda x: math.fmod(x, a), b)
def op_factorial(x: float) -> float: return _factorial(x)
def op_gcd(b: UInt, a: UInt) -> int: return _gcd(b, a)
def op_max(b: float, a: float) -> float: return _fmax(b, a)
def op_min(b: float, a: float) -> float: return _fmin(b, a)
def op_avg(b: float, a: float) -> float: return (b + a) / 2.0
def op_rand(x: UInt) -> float: return float(math.floor(x * random.random()))

def op_proot(a: float, b: float, c: float) -> tuple[float, float, float, float]:
    """Roots of `a x² + b x + c` as real and imaginary parts of each."""
    disc = b * b - 4.0 * a * c
    if disc < 0:
        real, imag = _fdiv(-b, 2.0 * a), _fdiv(math.sqrt(-disc), 2.0 * a)
        return (real, imag, real, -imag)
    root = math.sqrt(disc) if disc >= 0 else math.nan
    return (_fdiv(-b + root, 2.0 * a), 0.0, _fdiv(-b - root, 2.0 * a), 0.0)

## CONSTANTS
def op_pi() -> float: return math.pi
def op_e() -> float: return math.e
def op_g() -> float: return 9.80665

## TRIGONOMETRY & LOGARITHMS
def op_deg_rad(x: float) -> float: return math.radians(x)
def op_rad_deg(x: float) -> float: return math.degrees(x)
def op_sin(x: float) -> float: return _domain(math.sin, x)
def op_asin(x: float) -> float: return _domain(math.asin, x)
def op_cos(x: float) -> float: return _domain(math.cos, x)
def op_acos(x: float) -> float: return _domain(math.acos, x)
def op_tan(x: float) -> float: return _domain(math.tan, x)
def op_atan(x: float) -> float: return math.atan(x)
def op_log10(x: float) -> float: return _log(math.log10, x)
def op_log2(x: float) -> float: return _log(math.log2, x)
def op_ln(x: float) -> float: return _log(math.log, x)
def op_logn(b: float, a: float) -> float: return _fdiv(_log(math.log, b), _log(math.log, a))

## CONVERSIONS
# Negative integers print as 64-bit two's complement in hex and binary.
def op_dec_hex(x: UInt) -> str: return f"{x:x}"
def op_hex_dec(x: Hex) -> int: return x
def op_dec_bin(x: UInt) -> str: return f"{x:b}"
def op_bin_dec(x: Bin) -> int: return x
def op_bin_hex(x: Bin) -> str: return f"{x & 0xFFFFFFFFFFFFFFFF:x}"
def op_hex_bin(x: Hex) -> str: return f"{x & 0xFFFFFFFFFFFFFFFF:b}"
def op_c_f(x: float) -> float: return x * 9.0 / 5.0 + 32.0
def op_f_c(x: float) -> float: return (x - 32.0) * 5.0 / 9.0
def op_mi_km(x: float) -> float: return x * 1.609344
def op_km_mi(x: float) -> float: return x / 1.609344
def op_ft_m(x: float) -> float: return x / 3.281
def op_m_ft(x: float) -> float: return x * 3.281
def op_tip(x: float) -> float: return x * 0.15
def op_tip_plus(x: float) -> float: return x * 0.20

def op_hex_rgb(x: str) -> tuple[int, int, int]:
    if len(x) < 5:
        raise CompValueError(f"argument too short [{x}] is not of sufficient length")
    channels = []
    for part in (x[:2], x[2:4], x[4:]):
        try:
            channels.append(Hex.parse(part))
        except ValueError:
            raise CompValueError(f"unknown expression [{part}] is not a recognized operation or valid value (i_h)") from None
    return tuple(channels)

def op_rgb_hex(r: UInt, g: UInt, b: UInt) -> str: return f"{r:02x}{g:02x}{b:02x}"

## COLOURS
def format_swatch(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m████████\033[0m"

def op_rgb(r: Byte, g: Byte, b: Byte) -> tuple[str, str]:
    return (format_swatch(r, g, b), f"#{r:02x}{g:02x}{b:02x}")

def op_rgbh(r: HexByte, g: HexByte, b: HexByte) -> tuple[str, str]:
    return (format_swatch(r, g, b), f"#{r:02x}{g:02x}{b:02x}")
