"""
phase4: Pauli phases as a number type

Implements the cyclic group Z4 represented by the fourth roots of unity
{1, i, -1, -i}, the global phase factors that appear when Pauli operators
are multiplied. Provides:
- A two-bit canonical encoding (code 0..3 for +1, +i, -1, -i)
- Closed multiplication, division, inverse, power, negation, conjugation
- Promotion to Python, numpy and sympy complex values for everything else
"""

import logging
import math
import numbers
import random as _random

import numpy as np
import sympy

from .functions import power
from .promotion import (DEFAULT_COMPLEX, DEFAULT_REAL, SYMPY_TABLE,
                        complex_table, convert_for, promote_type, reim_table,
                        sympy_table)

logger = logging.getLogger(__name__)

__all__ = [
    'Phase', 'phase_from_factors', 'random_phases',
    'one', 'zero', 'iszero', 'inv', 'conj', 'flip_sign', 'in_range',
    'Phase4Error', 'InvalidCode', 'NotARootOfUnity', 'DisallowedOperation',
    'CODE_DTYPE'
]

# Storage type of a phase code: the smallest unsigned width that holds it
CODE_DTYPE = np.uint8

# `im` rather than `i`, so that the printed form is a constructor call
_SYMBOLS = ("+1", "+im", "-1", "-im")

_BOOLS = (bool, np.bool_)

# ============================================================================
# ERRORS
# ============================================================================


def _string_code(x):
    """Hex form of a code, zero-padded to the storage width, e.g. `0x04`."""
    width = 2 * np.dtype(CODE_DTYPE).itemsize
    x = int(x)
    sign = "-" if x < 0 else ""
    return f"{sign}0x{abs(x):0{width}x}"


class Phase4Error(Exception):
    """Base class for phase4 errors."""


class InvalidCode(Phase4Error, ValueError):
    """A discrete phase code outside [0, 3]."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"`{_string_code(value)}` not a valid Pauli phase.")


class NotARootOfUnity(Phase4Error, ValueError):
    """A number that is not exactly one of 1, i, -1, -i."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Can't convert `{value}` to a Pauli phase")


class DisallowedOperation(Phase4Error, TypeError):
    """An operation Phase refuses on purpose, such as `zero`."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"`{name}` is not defined for Pauli phases; no phase is zero")


# ============================================================================
# PHASE
# ============================================================================


def _code_of_number(x):
    """Code of the root of unity equal to `x`, compared in `x`'s own type."""
    if isinstance(x, sympy.Basic):
        candidates = sympy_table(x)
    elif isinstance(x, (numbers.Complex, np.number, np.bool_)):
        candidates = (1, 1j, -1, -1j)
    else:
        raise TypeError(f"Cannot convert {type(x)} to a Pauli phase")

    for code, value in enumerate(candidates):
        if x == value:
            return code
    raise NotARootOfUnity(x)


class Phase(numbers.Complex):
    """Pauli phase: an element of {1, i, -1, -i} under multiplication.

    Stored as a code in [0, 3]. The four values are interned, so phases can
    be compared with ``is`` as well as ``==``. Phases are immutable.

    Construction from numbers (int, float, complex, numpy and sympy
    numbers) requires exact equality:
        >>> Phase(1), Phase(1j), Phase(-1.0), Phase(-1j)
        (Phase(+1), Phase(+im), Phase(-1), Phase(-im))
        >>> Phase(2)
        Traceback (most recent call last):
        phase4.phase.NotARootOfUnity: Can't convert `2` to a Pauli phase

    Values of the storage type, numpy.uint8, are read as codes:
        >>> Phase(np.uint8(1)), Phase(np.uint8(3))
        (Phase(+im), Phase(-im))
        >>> Phase(np.uint8(4))
        Traceback (most recent call last):
        phase4.phase.InvalidCode: `0x04` not a valid Pauli phase.

    Multiplication, power, inverse:
        >>> [Phase(1j) * p for p in (Phase(1), Phase(1j), Phase(-1), Phase(-1j))]
        [Phase(+im), Phase(-1), Phase(-im), Phase(+1)]
        >>> Phase(1j) ** 5, Phase(1j).inv()
        (Phase(+im), Phase(-im))

    Anything that leaves the group promotes to a complex number:
        >>> 1 * Phase(1j), Phase(-1j) * 2.1, Phase(1) + Phase(1j)
        (1j, -2.1j, (1+1j))
    """

    __slots__ = ("_code",)

    # numpy scalars and arrays hand binary operations back to Phase
    __array_ufunc__ = None

    def __new__(cls, x):
        """Create a phase from a number, a uint8 code or another phase.

        Args:
            x: Phase, numpy.uint8 code, or a number equal to 1, i, -1 or -i

        Raises:
            InvalidCode: if `x` is a numpy.uint8 not below 4
            NotARootOfUnity: if `x` is a number but not a fourth root of unity
            TypeError: if `x` is not a number
        """
        if isinstance(x, Phase):
            return x
        if isinstance(x, CODE_DTYPE):
            return cls.from_code(x)
        return _INSTANCES[_code_of_number(x)]

    @classmethod
    def from_code(cls, code):
        """Phase with the given code: 0, 1, 2, 3 for +1, +i, -1, -i."""
        if isinstance(code, _BOOLS) or not isinstance(code, numbers.Integral):
            raise TypeError(f"Phase code must be an integer, got {type(code)}")
        if not 0 <= code < 4:
            raise InvalidCode(code)
        return _INSTANCES[int(code)]

    @classmethod
    def random(cls, rng=None):
        """Uniformly random phase.

        Draws two independent fair bits and uses them as the two bits of the
        code, which is cheaper than sampling an integer in [0, 3].

        Args:
            rng: numpy.random.Generator, random.Random, or None for the
                global `random` state
        """
        low, high = _draw_bits(2, rng)
        return _INSTANCES[low | high << 1]

    @property
    def code(self):
        """Canonical code in [0, 3]."""
        return self._code

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (Phase.from_code, (self._code,))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return f"{type(self).__name__}({_SYMBOLS[self._code]})"

    def __hash__(self):
        # Hash like the equal Python or numpy number. sympy values hash
        # differently, and I and 1j cannot share a hash since I != 1j.
        return hash(complex_table()[self._code])

    def __eq__(self, other):
        if isinstance(other, Phase):
            return self._code == other._code
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return value == other

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def __complex__(self):
        return complex_table()[self._code]

    def to_complex(self, ctype=DEFAULT_COMPLEX):
        """Exact value as `ctype` (``complex`` or a numpy complex type)."""
        return complex_table(ctype)[self._code]

    def to_sympy(self):
        """Exact sympy value: 1, I, -1 or -I."""
        return SYMPY_TABLE[self._code]

    def _sympy_(self):
        return SYMPY_TABLE[self._code]

    def reim(self, rtype=DEFAULT_REAL):
        """(real, imag) as two values of `rtype`."""
        return reim_table(rtype)[self._code]

    @property
    def real(self):
        return reim_table()[self._code][0]

    @property
    def imag(self):
        return reim_table()[self._code][1]

    def real_as(self, rtype):
        return self.reim(rtype)[0]

    def imag_as(self, rtype):
        return self.reim(rtype)[1]

    # ------------------------------------------------------------------
    # Predicates and norms
    # ------------------------------------------------------------------

    def is_real(self):
        """True for +1 and -1."""
        return self._code % 2 == 0

    def is_integer(self):
        return self.is_real()

    def is_pow2(self):
        return self._code == 0

    def sign(self):
        """Phase(+1) for +1 and +i, Phase(-1) for -1 and -i.

        This is a convention, not the complex sign z/|z|: the group is split
        into the half reached from +1 and the half reached from -1.
        """
        return _INSTANCES[self._code & 2]

    def __abs__(self):
        return 1

    def abs2(self):
        return 1

    def logabs2(self):
        return 0.0

    # ------------------------------------------------------------------
    # Closed operations
    # ------------------------------------------------------------------

    def __neg__(self):
        return _INSTANCES[(self._code + 2) % 4]

    def __pos__(self):
        return self

    def inv(self):
        """Multiplicative inverse, equal to the conjugate."""
        return _INSTANCES[-self._code % 4]

    def conjugate(self):
        return self if self._code % 2 == 0 else -self

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _times_bool(self, b):
        """``b * self`` with an exact, positive zero for False."""
        ctype = promote_type(type(b))
        return complex_table(ctype)[self._code] if b else ctype(0)

    def __mul__(self, other):
        if isinstance(other, Phase):
            return _INSTANCES[(self._code + other._code) % 4]
        if isinstance(other, _BOOLS):
            return self._times_bool(other)
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return value * other

    def __rmul__(self, other):
        if isinstance(other, _BOOLS):
            return self._times_bool(other)
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return other * value

    def __truediv__(self, other):
        if isinstance(other, Phase):
            return _INSTANCES[(self._code - other._code) % 4]
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return value / other

    def __rtruediv__(self, other):
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return other / value

    # Phase is not closed under + and -
    def __add__(self, other):
        if isinstance(other, Phase):
            return complex(self) + complex(other)
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return value + other

    def __radd__(self, other):
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return other + value

    def __sub__(self, other):
        if isinstance(other, Phase):
            return complex(self) - complex(other)
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return value - other

    def __rsub__(self, other):
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return other - value

    def __pow__(self, other):
        """Power of a phase.

        - bool exponent: True gives the phase, False gives Phase(+1)
        - integer exponent (any sign): a phase, by modular arithmetic on codes
        - Phase exponent: complex128 from the general complex power
        - any other number: promoted complex power
        """
        if isinstance(other, _BOOLS):
            return self if other else _INSTANCES[0]
        if isinstance(other, numbers.Integral):
            return _INSTANCES[(self._code * int(other)) % 4]
        if isinstance(other, Phase):
            return power(self, other)
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return value ** other

    def __rpow__(self, other):
        value = convert_for(self._code, other)
        if value is None:
            return NotImplemented
        return other ** value


_INSTANCES = tuple(object.__new__(Phase) for _ in range(4))
for _code, _instance in enumerate(_INSTANCES):
    object.__setattr__(_instance, "_code", _code)
del _code, _instance


# ============================================================================
# FREE FUNCTIONS
# ============================================================================


def phase_from_factors(num_imag, num_minus):
    """Construct a Pauli phase from `num_imag` factors of i and `num_minus` of -1.

    Equivalent to ``Phase(1j ** num_imag * (-1) ** num_minus)``, computed on
    the code directly: multiplying by -1 rotates the code by two.

    Example:
        >>> phase_from_factors(3, 1)
        Phase(+im)
    """
    return _INSTANCES[(int(num_imag) % 4 + 2 * (int(num_minus) % 2)) % 4]


def _draw_bits(n, rng=None):
    if rng is None:
        return [_random.getrandbits(1) for _ in range(n)]
    if isinstance(rng, _random.Random):
        return [rng.getrandbits(1) for _ in range(n)]
    return [int(b) for b in rng.integers(0, 2, size=n)]


def random_phases(size, rng=None):
    """List of `size` independent uniformly random phases.

    Args:
        size: Number of phases
        rng: numpy.random.Generator, random.Random, or None
    """
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    bits = _draw_bits(2 * size, rng)
    return [_INSTANCES[low | high << 1] for low, high in zip(bits[0::2], bits[1::2])]


def one(x):
    """Multiplicative identity Phase(+1), for the Phase type or an instance."""
    if x is Phase or isinstance(x, Phase):
        return _INSTANCES[0]
    raise TypeError(f"one() expects Phase or a Phase instance, got {x!r}")


# No phase is zero; both always raise
def zero(x):
    raise DisallowedOperation("zero")


def iszero(x):
    raise DisallowedOperation("iszero")


def inv(p):
    return p.inv()


def conj(p):
    return p.conjugate()


def _signbit(y):
    if isinstance(y, numbers.Integral):
        return y < 0
    return math.copysign(1.0, y) < 0


def flip_sign(p, y):
    """``-p`` if the sign bit of the real number `y` is set, else `p`.

    -0.0 counts as negative.
    """
    if not isinstance(y, numbers.Real):
        raise TypeError(f"flip_sign expects a real number, got {type(y)}")
    return -p if _signbit(y) else p


def in_range(p, r):
    """True if `p` is real and its real value lies in the range `r`.

    Prefer this to ``p in r``, which `range` answers by scanning with ``==``.

    Example:
        >>> in_range(Phase(-1), range(-3, 0)), in_range(Phase(1j), range(-3, 3))
        (True, False)
    """
    return p.is_real() and p.real in r


logger.debug(f"Interned {len(_INSTANCES)} Pauli phases, code storage {np.dtype(CODE_DTYPE).name}")
