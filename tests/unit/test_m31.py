"""
Fields - M31 Unit Tests
Tests for twinmerkle/fields/m31.py
"""
import random

import pytest

from twinmerkle.fields.m31 import M31, M31_BYTE_SIZE, M31_MODULUS, to_m31


P = M31_MODULUS


class TestConstruction:
    """Tests for canonical-form validation."""

    def test_modulus_value(self):
        assert P == 2**31 - 1

    def test_accepts_canonical_range(self):
        assert M31(0).value == 0
        assert M31(P - 1).value == P - 1

    @pytest.mark.parametrize("value", [P, P + 5, -1])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(ValueError):
            M31(value)

    @pytest.mark.parametrize("value", [True, "1", 1.0, None])
    def test_rejects_non_int(self, value):
        with pytest.raises(TypeError):
            M31(value)

    def test_reduce_wraps(self):
        assert M31.reduce(P) == M31(0)
        assert M31.reduce(-1) == M31(P - 1)
        assert M31.reduce(2 * P + 7) == M31(7)

    def test_to_m31_coerces_int(self):
        assert to_m31(5) == M31(5)
        element = M31(9)
        assert to_m31(element) is element

    def test_random_in_range_and_seeded(self):
        a = [M31.random(random.Random(1)) for _ in range(3)]
        b = [M31.random(random.Random(1)) for _ in range(3)]
        assert a == b
        assert all(0 <= x.value < P for x in a)

    def test_hashable(self):
        assert len({M31(1), M31(1), M31(2)}) == 2


class TestArithmetic:
    """Tests for field operations."""

    def test_add_wraps(self):
        assert M31(P - 1) + M31(1) == M31(0)

    def test_sub_wraps(self):
        assert M31(0) - M31(1) == M31(P - 1)

    def test_mixed_int_operands(self):
        assert 1 + M31(2) == M31(3)
        assert 5 - M31(2) == M31(3)
        assert M31(3) * 4 == M31(12)

    def test_two_pow_31_is_one(self):
        """2^31 = p + 1, so 2^30 * 2 reduces to 1."""
        assert M31(1 << 30) * M31(2) == M31(1)

    def test_neg(self):
        assert -M31(1) == M31(P - 1)
        assert -M31(0) == M31(0)

    @pytest.mark.parametrize("value", [1, 2, 12345, P - 1])
    def test_inverse(self, value):
        x = M31(value)
        assert x * x.inverse() == M31.one()

    def test_zero_has_no_inverse(self):
        with pytest.raises(ZeroDivisionError):
            M31.zero().inverse()

    def test_fermat(self):
        assert M31(3) ** (P - 1) == M31(1)

    def test_negative_pow_is_inverse(self):
        assert M31(2) ** -1 == M31(2).inverse()

    def test_truediv(self):
        assert M31(6) / M31(3) == M31(2)

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            M31(1) + 1.5


class TestSerialization:
    """Tests for the fixed-width encoding fed to leaf hashes."""

    def test_little_endian(self):
        assert M31(1).to_bytes() == b"\x01\x00\x00\x00"
        assert M31(0x01020304).to_bytes() == b"\x04\x03\x02\x01"

    def test_fixed_width(self):
        assert len(M31(0).to_bytes()) == M31_BYTE_SIZE
        assert len(M31(P - 1).to_bytes()) == M31_BYTE_SIZE

    def test_from_bytes(self):
        assert M31.from_bytes(b"\x04\x03\x02\x01") == M31(0x01020304)

    def test_from_bytes_wrong_length(self):
        with pytest.raises(ValueError, match="4 bytes"):
            M31.from_bytes(b"\x01\x00")

    def test_from_bytes_non_canonical(self):
        """0x7fffffff is p itself and must be rejected."""
        with pytest.raises(ValueError):
            M31.from_bytes(b"\xff\xff\xff\x7f")
