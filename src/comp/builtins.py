## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import operators as O
from . import combinators as C
from .library import Library


def load_builtins_library():
    # Combinators
    combinators = {
        'drop': C.comb_drop, 'dup': C.comb_dup, 'swap': C.comb_swap,
        'cls': C.comb_cls, 'roll': C.comb_roll, 'rot': C.comb_rot,
        '+_': C.comb_add_all, 'x_': C.comb_mul_all,
        'max_': C.comb_max_all, 'min_': C.comb_min_all, 'avg_': C.comb_avg_all,
        'sa': C.comb_store_slot, 'sb': C.comb_store_slot, 'sc': C.comb_store_slot,
        '_a': C.comb_push_slot, '_b': C.comb_push_slot, '_c': C.comb_push_slot,
        'store': C.comb_store, 'rcl': C.comb_recall,
        'pln': C.comb_println, 'a_b': C.comb_conversion_constant,
        '(': C.comb_function, '[': C.comb_lambda, '{': C.comb_comment, 'ifeq': C.comb_ifeq,
        'map': C.comb_map, 'fold': C.comb_fold, 'scan': C.comb_scan,
    }
    functions = {
        '+': O.op_add, '++': O.op_add_one, '-': O.op_sub, '--': O.op_sub_one,
        'x': O.op_mul, '/': O.op_div, 'chs': O.op_chs, 'abs': O.op_abs,
        'round': O.op_round, 'inv': O.op_inv, 'sqrt': O.op_sqrt, 'throot': O.op_throot,
        'proot': O.op_proot, '^': O.op_pow, '%': O.op_mod, '!': O.op_factorial,
        'gcd': O.op_gcd, 'max': O.op_max, 'min': O.op_min, 'avg': O.op_avg, 'rand': O.op_rand,
        'pi': O.op_pi, 'e': O.op_e, 'g': O.op_g,
        'deg_rad': O.op_deg_rad, 'rad_deg': O.op_rad_deg,
        'sin': O.op_sin, 'asin': O.op_asin, 'cos': O.op_cos, 'acos': O.op_acos, 'tan': O.op_tan, 'atan': O.op_atan,
        'log': O.op_log10, 'log2': O.op_log2, 'logn': O.op_logn, 'ln': O.op_ln,
        'dec_hex': O.op_dec_hex, 'hex_dec': O.op_hex_dec, 'dec_bin': O.op_dec_bin,
        'bin_dec': O.op_bin_dec, 'bin_hex': O.op_bin_hex, 'hex_bin': O.op_hex_bin,
        'c_f': O.op_c_f, 'f_c': O.op_f_c, 'mi_km': O.op_mi_km, 'km_mi': O.op_km_mi,
        'ft_m': O.op_ft_m, 'm_ft': O.op_m_ft, 'hex_rgb': O.op_hex_rgb, 'rgb_hex': O.op_rgb_hex,
        'tip': O.op_tip, 'tip+': O.op_tip_plus,
        'rgb': O.op_rgb, 'rgbh': O.op_rgbh,
    }
    aliases = {
        'clr': 'cls', 'int': 'round', 'exp': '^', 'mod': '%',
        'log10': 'log', 'C_F': 'c_f', 'F_C': 'f_c',
    }

    lib = Library(functions={}, combinators=combinators, aliases=aliases)

    # Functions (wrapped via Library helper)
    for name, fn in functions.items():
        lib.add_function(name, fn)

    lib.ensure_consistent()
    return lib
