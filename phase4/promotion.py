"""
Numeric tower rules for Pauli phases.

A Phase has no width of its own. When it meets another number it is
converted to the complex type that number calls for, and the operation runs
in that type. Three families are covered:

- Python numbers (bool, int, float, complex, Fraction) -> complex
- numpy scalars and arrays -> the numpy complex type of matching width
- sympy expressions -> exact sympy values (1, I, -1, -I), or Float-backed
  values (1.0, 1.0*I, -1.0, -1.0*I) when the expression holds Floats

Conversion tables are exact: every entry is built from the integer pairs
(1, 0), (0, 1), (-1, 0), (0, -1), so no width rounds them.
"""

import logging
import numbers
from functools import lru_cache

import numpy as np
import sympy

logger = logging.getLogger(__name__)

DEFAULT_COMPLEX = complex
DEFAULT_REAL = int

# (real, imag) of +1, +i, -1, -i, indexed by code
_REIM = ((1, 0), (0, 1), (-1, 0), (0, -1))

SYMPY_TABLE = (sympy.S.One, sympy.I, sympy.S.NegativeOne, -sympy.I)

# sympy Floats never equal Integers, so Float operands get their own table
SYMPY_FLOAT_TABLE = (
    sympy.Float(1), sympy.Float(1) * sympy.I,
    sympy.Float(-1), sympy.Float(-1) * sympy.I,
)


def sympy_table(expr):
    """(+1, +i, -1, -i) as sympy values of the same kind as `expr`."""
    return SYMPY_FLOAT_TABLE if expr.has(sympy.Float) else SYMPY_TABLE


def promote_type(t) -> type:
    """Return the complex type a Phase takes when combined with type `t`.

    Args:
        t: Python number type, numpy scalar type or numpy dtype

    Returns:
        ``complex`` or a numpy complex scalar type

    Raises:
        TypeError: if `t` is not a numeric type

    Example:
        >>> promote_type(float)
        <class 'complex'>
        >>> promote_type(np.float32)
        <class 'numpy.complex64'>
    """
    if isinstance(t, np.dtype):
        t = t.type
    if not isinstance(t, type):
        raise TypeError(f"Expected a type, got {t!r}")

    if issubclass(t, np.generic):
        if issubclass(t, np.complexfloating):
            return t
        if issubclass(t, np.bool_):
            # Booleans promote like the default integer
            return np.result_type(np.int_, np.complex64).type
        if issubclass(t, np.number):
            return np.result_type(t, np.complex64).type
        raise TypeError(f"No complex promotion for {t.__name__}")

    if issubclass(t, numbers.Complex):
        return DEFAULT_COMPLEX
    raise TypeError(f"No complex promotion for {t.__name__}")


def _check_complex_type(ctype):
    if isinstance(ctype, np.dtype):
        ctype = ctype.type
    if ctype is complex:
        return ctype
    if isinstance(ctype, type) and issubclass(ctype, np.complexfloating):
        return ctype
    raise TypeError(f"Cannot convert Pauli phase to {ctype!r}")


@lru_cache(maxsize=None)
def _complex_table(ctype):
    table = tuple(ctype(complex(re, im)) for re, im in _REIM)
    logger.debug(f"Cached Pauli phase conversion table for {ctype.__name__}")
    return table


def complex_table(ctype=DEFAULT_COMPLEX) -> tuple:
    """Exact values of (+1, +i, -1, -i) in the complex type `ctype`.

    Args:
        ctype: ``complex``, a numpy complex scalar type or complex dtype

    Returns:
        Tuple of four `ctype` values, indexed by phase code
    """
    return _complex_table(_check_complex_type(ctype))


@lru_cache(maxsize=None)
def reim_table(rtype=DEFAULT_REAL):
    """(real, imag) pairs of (+1, +i, -1, -i) as values of `rtype`."""
    if isinstance(rtype, np.dtype):
        rtype = rtype.type
    return tuple((rtype(re), rtype(im)) for re, im in _REIM)


def convert_for(code: int, other):
    """Convert the phase with `code` to the type it takes when meeting `other`.

    Args:
        code: Phase code in [0, 3]
        other: The other operand of a binary operation

    Returns:
        The converted phase, or None when `other` is not a supported number
    """
    if isinstance(other, sympy.Basic):
        return sympy_table(other)[code]
    if isinstance(other, np.ndarray):
        t = other.dtype.type
    else:
        t = type(other)
    try:
        ctype = promote_type(t)
    except TypeError:
        return None
    return complex_table(ctype)[code]
