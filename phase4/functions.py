"""
Transcendental functions of Pauli phases.

A phase takes only four values, so every function here is evaluated once,
at import, on the complex128 values of 1, i, -1, -i. A call is then a
single table index by phase code.

    >>> from phase4 import Phase
    >>> from phase4.functions import log, angle
    >>> log(Phase(-1))
    np.complex128(3.141592653589793j)
    >>> angle(Phase(-1j))
    np.float64(-1.5707963267948966)
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)

__all__ = [
    'exp', 'angle', 'log', 'cos', 'sin', 'tan', 'asin', 'acos', 'atan',
    'cosh', 'sinh', 'tanh', 'acosh', 'asinh', 'atanh', 'cis', 'cispi',
    'log2', 'log10', 'expm1', 'log1p', 'exp10', 'exp2', 'power'
]

# Positive zero parts throughout. The sign of zero picks the branch at cuts.
_ROOTS = np.array(
    [complex(1.0, 0.0), complex(0.0, 1.0), complex(-1.0, 0.0), complex(0.0, -1.0)],
    dtype=np.complex128,
)


def _tabulate(f):
    # atanh(1), atan(i), log1p(-1), ... are poles; keep numpy's infinities
    with np.errstate(divide="ignore", invalid="ignore"):
        return tuple(f(_ROOTS))


def _lookup(name, f):
    """Build a phase function from the numpy function `f`."""
    table = _tabulate(f)

    def fn(p):
        return table[p.code]

    fn.__name__ = fn.__qualname__ = name
    fn.__doc__ = f"``{name}`` of a Pauli phase, looked up by code."
    fn.table = table
    return fn


exp = _lookup("exp", np.exp)
angle = _lookup("angle", np.angle)
cos = _lookup("cos", np.cos)
sin = _lookup("sin", np.sin)
tan = _lookup("tan", np.tan)
asin = _lookup("asin", np.arcsin)
acos = _lookup("acos", np.arccos)
atan = _lookup("atan", np.arctan)
cosh = _lookup("cosh", np.cosh)
sinh = _lookup("sinh", np.sinh)
tanh = _lookup("tanh", np.tanh)
acosh = _lookup("acosh", np.arccosh)
asinh = _lookup("asinh", np.arcsinh)
atanh = _lookup("atanh", np.arctanh)
cis = _lookup("cis", lambda z: np.exp(1j * z))
cispi = _lookup("cispi", lambda z: np.exp(1j * np.pi * z))
log2 = _lookup("log2", np.log2)
log10 = _lookup("log10", np.log10)
expm1 = _lookup("expm1", np.expm1)
log1p = _lookup("log1p", np.log1p)
exp10 = _lookup("exp10", lambda z: np.power(10.0, z))
exp2 = _lookup("exp2", np.exp2)

_LOG = tuple(np.complex128(complex(0.0, a)) for a in angle.table)


def log(p):
    """Principal logarithm of a Pauli phase.

    The modulus is 1, so the result is purely imaginary: ``0``, ``pi/2``,
    ``pi`` and ``-pi/2`` times i for +1, +i, -1, -i.
    """
    return _LOG[p.code]


log.table = _LOG

with np.errstate(divide="ignore", invalid="ignore"):
    _POWER = tuple(tuple(np.power(b, e) for e in _ROOTS) for b in _ROOTS)


def power(base, exponent):
    """General complex power ``base ** exponent`` of two Pauli phases.

    The result is not a phase in general (i**i = exp(-pi/2)), so it is
    returned as complex128 from a 4x4 table indexed by (base, exponent).
    """
    return _POWER[base.code][exponent.code]


logger.debug(f"Built Pauli phase lookup tables for {len(__all__)} functions")
