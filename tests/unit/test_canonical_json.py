"""
Schemas - Canonical JSON Unit Tests
Tests for twinmerkle/schemas/canonical.py

Tests:
- Key ordering and compact separators
- None exclusion
- bytes and M31 encoding
- Rejection of non-finite floats and unknown types
"""
import pytest

from twinmerkle.fields.m31 import M31
from twinmerkle.schemas.canonical import canonicalize_value, dumps_canonical
from twinmerkle.schemas.errors import CanonicalizationException, ErrorCodes


class TestDumpsCanonical:
    """Tests for dumps_canonical()."""

    def test_sorted_keys_and_compact(self):
        assert dumps_canonical({"b": 2, "a": 1}) == '{"a":1,"b":2}'

    def test_key_order_independent(self):
        assert dumps_canonical({"x": 1, "y": [1, 2]}) == dumps_canonical({"y": [1, 2], "x": 1})

    def test_none_excluded(self):
        assert dumps_canonical({"a": 1, "b": None}) == '{"a":1}'

    def test_bytes_as_hex(self):
        assert dumps_canonical({"root": b"\xde\xad"}) == '{"root":"0xdead"}'

    def test_m31_as_int(self):
        assert dumps_canonical([M31(1), M31(2)]) == "[1,2]"

    def test_tuple_as_list(self):
        assert dumps_canonical((1, 2)) == "[1,2]"

    def test_nan_rejected(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"x": float("nan")})
        assert exc_info.value.code == ErrorCodes.CANONICALIZATION_ERROR
        assert exc_info.value.details["path"] == "x"

    def test_unknown_type_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"x": object()})


class TestCanonicalizeValue:
    """Tests for canonicalize_value()."""

    def test_nested_path_in_error(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value({"outer": [1, float("inf")]})
        assert exc_info.value.details["path"] == "outer[1]"
