## comp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math

from comp import operators as O
from comp.api import Runtime
from comp.config import Config
from comp.errors import CompValueError

import pytest


def run(source, **kwargs):
    return Runtime(**kwargs).run(source)


def test_division_and_powers_never_raise():
    assert O.op_div(1.0, 0.0) == math.inf
    assert O.op_div(-1.0, 0.0) == -math.inf
    assert math.isnan(O.op_div(0.0, 0.0))
    assert O.op_pow(0.0, -1.0) == math.inf
    assert O.op_pow(10.0, 400.0) == math.inf
    assert math.isnan(O.op_pow(-8.0, 1 / 3))
    assert math.isnan(O.op_mod(7.0, 0.0))
    assert O.op_inv(0.0) == math.inf


def test_rounding_is_half_away_from_zero():
    assert O.op_round(2.5) == 3.0
    assert O.op_round(-2.5) == -3.0
    assert O.op_round(0.49999) == 0.0
    assert O.op_round(math.inf) == math.inf


def test_factorial_and_gcd():
    assert O.op_factorial(5.0) == 120.0
    assert O.op_factorial(5.9) == 120.0
    assert O.op_factorial(1.0) == 1.0
    assert O.op_factorial(-3.0) == 1.0
    assert O.op_factorial(200.0) == math.inf
    assert O.op_gcd(12, 18) == 6
    assert O.op_gcd(7, 0) == 7


def test_principal_roots():
    assert O.op_proot(1.0, -3.0, 2.0) == (2.0, 0.0, 1.0, 0.0)
    assert O.op_proot(1.0, 0.0, 1.0) == (0.0, 1.0, 0.0, -1.0)
    assert run("1 -3 2 proot") == ['2', '0', '1', '0']


def test_trigonometry_and_logarithms():
    assert run("90 deg_rad sin") == ['1']
    assert run("2 asin") == ['NaN']
    assert run("100 log") == ['2']
    assert run("8 log2") == ['3']
    assert float(run("8 2 logn")[0]) == pytest.approx(3.0)
    assert float(run("27 3 throot")[0]) == pytest.approx(3.0)


def test_constants():
    assert run("pi") == ['3.141592653589793']
    assert run("e") == ['2.718281828459045']
    assert run("g") == ['9.80665']


def test_radix_conversions():
    assert run("255 dec_hex") == ['ff']
    assert run("ff hex_dec") == ['255']
    assert run("5 dec_bin") == ['101']
    assert run("101 bin_dec") == ['5']
    assert run("1111 bin_hex") == ['f']
    assert run("f hex_bin") == ['1111']
    assert run("-1 hex_bin") == ['1' * 64]

    with pytest.raises(CompValueError, match=r"\(i_b\)"):
        run("102 bin_dec")
    with pytest.raises(CompValueError, match=r"\(u\)"):
        run("-4 6 gcd")


def test_unit_conversions():
    assert run("100 c_f") == ['212']
    assert run("212 F_C") == ['100']
    assert run("1 mi_km") == ['1.609344']
    assert run("3.281 ft_m") == ['1']
    assert run("100 tip") == ['15']
    assert float(run("100 tip+")[0]) == pytest.approx(20.0)


def test_conversion_constant_comes_from_config():
    assert run("4 a_b") == ['4']
    assert run("4 a_b", config=Config(conversion_constant=2.5)) == ['10']


def test_colour_conversions():
    assert run("ff8000 hex_rgb") == ['255', '128', '0']
    assert run("255 128 0 rgb_hex") == ['ff8000']
    assert run("255 0 0 rgb")[-1] == '#ff0000'
    assert run("ff 00 00 rgbh")[-1] == '#ff0000'

    with pytest.raises(CompValueError, match="argument too short"):
        run("fff hex_rgb")
    with pytest.raises(CompValueError):
        run("256 0 0 rgb")


def test_random_is_below_bound():
    for _ in range(10):
        assert 0 <= int(run("10 rand")[0]) < 10


def test_println_writes_top_of_stack(capsys):
    assert run("1 hello pln") == ['1']
    assert capsys.readouterr().out == "hello\n"
