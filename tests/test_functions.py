"""Tests for table-driven phase functions and numeric promotion."""

import cmath
import math
from fractions import Fraction

import numpy as np
import pytest

from phase4 import Phase, functions, promote_type
from phase4.promotion import complex_table, convert_for, reim_table

PHASES = (Phase(1), Phase(1j), Phase(-1), Phase(-1j))
ROOTS = (complex(1, 0), complex(0, 1), complex(-1, 0), complex(0, -1))

FUNCTIONS = [
    ("exp", cmath.exp),
    ("cos", cmath.cos),
    ("sin", cmath.sin),
    ("cosh", cmath.cosh),
    ("sinh", cmath.sinh),
    ("log10", cmath.log10),
    ("cis", lambda z: cmath.exp(1j * z)),
    ("cispi", lambda z: cmath.exp(1j * math.pi * z)),
    ("exp2", lambda z: 2 ** z),
    ("exp10", lambda z: 10 ** z),
    ("expm1", lambda z: cmath.exp(z) - 1),
]


class TestLookupFunctions:
    """Each function agrees with the same function evaluated on complex128."""

    @pytest.mark.parametrize("name, reference", FUNCTIONS)
    def test_matches_cmath(self, name, reference):
        f = getattr(functions, name)
        for p, z in zip(PHASES, ROOTS):
            assert complex(f(p)) == pytest.approx(reference(z), abs=1e-12)

    @pytest.mark.parametrize("name, ufunc", [
        ("tan", np.tan), ("asin", np.arcsin), ("acos", np.arccos),
        ("tanh", np.tanh), ("acosh", np.arccosh), ("log2", np.log2),
    ])
    def test_matches_numpy(self, name, ufunc):
        f = getattr(functions, name)
        for p, z in zip(PHASES, ROOTS):
            assert complex(f(p)) == pytest.approx(complex(ufunc(np.complex128(z))), abs=1e-12)

    def test_poles(self):
        assert np.isinf(functions.atanh(Phase(1)).real)
        assert np.isinf(functions.log1p(Phase(-1)).real)

    def test_result_types(self):
        for p in PHASES:
            assert isinstance(functions.exp(p), np.complex128)
            assert isinstance(functions.angle(p), np.float64)

    def test_angle(self):
        angles = [float(functions.angle(p)) for p in PHASES]
        assert angles == pytest.approx([0.0, math.pi / 2, math.pi, -math.pi / 2], abs=1e-15)

    def test_log(self):
        assert functions.log(Phase(1)) == 0
        assert complex(functions.log(Phase(1j))) == pytest.approx(complex(0, math.pi / 2), abs=1e-15)
        assert complex(functions.log(Phase(-1))) == pytest.approx(complex(0, math.pi), abs=1e-15)
        assert complex(functions.log(Phase(-1j))) == pytest.approx(complex(0, -math.pi / 2), abs=1e-15)
        for p in PHASES:
            assert functions.log(p).real == 0.0

    def test_tables_are_shared(self):
        assert functions.exp(Phase(1j)) is functions.exp(Phase(1j))
        assert functions.exp.__name__ == "exp"

    def test_power_table(self):
        for b, zb in zip(PHASES, ROOTS):
            for e, ze in zip(PHASES, ROOTS):
                assert complex(functions.power(b, e)) == pytest.approx(zb ** ze, abs=1e-12)
                assert functions.power(b, e) == b ** e


class TestPromotion:
    """Result types of mixed arithmetic."""

    @pytest.mark.parametrize("t", [bool, int, float, complex, Fraction])
    def test_python_numbers(self, t):
        assert promote_type(t) is complex

    @pytest.mark.parametrize("t, expected", [
        (np.complex64, np.complex64),
        (np.complex128, np.complex128),
        (np.clongdouble, np.clongdouble),
        (np.float32, np.complex64),
        (np.float64, np.complex128),
        (np.int8, np.complex64),
        (np.int64, np.complex128),
        (np.bool_, np.complex128),
    ])
    def test_numpy_types(self, t, expected):
        assert promote_type(t) is expected
        assert promote_type(np.dtype(t)) is expected

    def test_non_numeric(self):
        with pytest.raises(TypeError):
            promote_type(str)
        with pytest.raises(TypeError):
            promote_type(np.str_)
        with pytest.raises(TypeError):
            promote_type(1.0)

    def test_complex_table_is_exact(self):
        for ctype in (complex, np.complex64, np.complex128, np.clongdouble):
            table = complex_table(ctype)
            assert [(z.real, z.imag) for z in table] == [(1, 0), (0, 1), (-1, 0), (0, -1)]
            assert all(type(z) is ctype for z in table)

    def test_complex_table_cached(self):
        assert complex_table(np.complex64) is complex_table(np.dtype(np.complex64))

    def test_reim_table(self):
        assert reim_table(int) == ((1, 0), (0, 1), (-1, 0), (0, -1))
        assert all(type(x) is float for pair in reim_table(float) for x in pair)

    def test_convert_for(self):
        assert convert_for(1, 2.0) == 1j
        assert type(convert_for(2, np.float32(1))) is np.complex64
        assert convert_for(3, np.zeros(2, dtype=np.int64)) == -1j
        assert convert_for(0, "x") is None
        assert convert_for(0, np.array(["x"])) is None
