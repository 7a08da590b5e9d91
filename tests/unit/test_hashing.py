"""
Crypto - Hashing Unit Tests
Tests for twinmerkle/crypto/hashing.py

Tests:
- sha256 known values
- Leaf/node domain separation
- Fixed-width little-endian leaf encoding
- to_hex/from_hex round trip
"""
import hashlib
import pytest

from twinmerkle.crypto.hashing import (
    DEFAULT_HASHER,
    HASH_SIZE,
    HashMode,
    MerkleHasher,
    Sha256MerkleHasher,
    encode_leaf,
    from_hex,
    hash_children,
    hash_leaf,
    hash_node,
    sha256,
    to_hex,
)
from twinmerkle.fields.m31 import M31


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        expected = hashlib.sha256(b"hello").digest()
        result = sha256(b"hello")

        assert result == expected
        assert len(result) == HASH_SIZE

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()


class TestHashNode:
    """Tests for the tagged hash primitive."""

    def test_leaf_mode_prefix(self):
        payload = b"abc"
        assert hash_node(HashMode.LEAF, payload) == sha256(b"\x00" + payload)

    def test_node_mode_prefix(self):
        payload = b"abc"
        assert hash_node(HashMode.NODE, payload) == sha256(b"\x01" + payload)

    def test_modes_differ_on_same_payload(self):
        payload = bytes(64)
        assert hash_node(HashMode.LEAF, payload) != hash_node(HashMode.NODE, payload)

    def test_accepts_mode_string(self):
        assert hash_node("leaf", b"x") == hash_node(HashMode.LEAF, b"x")

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError):
            hash_node("branch", b"x")


class TestLeafHashing:
    """Tests for leaf encoding and leaf hashing."""

    def test_encode_leaf_little_endian(self):
        encoded = encode_leaf([M31(1), M31(2)])
        assert encoded == b"\x01\x00\x00\x00\x02\x00\x00\x00"

    def test_encode_empty_leaf(self):
        assert encode_leaf([]) == b""

    def test_hash_leaf_matches_definition(self):
        values = [M31(1), M31(2)]
        expected = sha256(b"\x00" + b"\x01\x00\x00\x00\x02\x00\x00\x00")
        assert hash_leaf(values) == expected

    def test_element_order_matters(self):
        assert hash_leaf([M31(1), M31(2)]) != hash_leaf([M31(2), M31(1)])

    def test_leaf_bytes_not_confused_with_node(self):
        """A leaf whose raw bytes equal left || right hashes differently from the node."""
        left, right = sha256(b"a"), sha256(b"b")
        assert hash_node(HashMode.LEAF, left + right) != hash_children(left, right)


class TestHashChildren:
    """Tests for node hashing."""

    def test_matches_definition(self):
        left, right = sha256(b"a"), sha256(b"b")
        assert hash_children(left, right) == sha256(b"\x01" + left + right)

    def test_order_matters(self):
        left, right = sha256(b"a"), sha256(b"b")
        assert hash_children(left, right) != hash_children(right, left)


class TestMerkleHasher:
    """Tests for the hasher collaborator."""

    def test_default_is_sha256_hasher(self):
        assert isinstance(DEFAULT_HASHER, Sha256MerkleHasher)
        assert isinstance(DEFAULT_HASHER, MerkleHasher)

    def test_delegates_to_module_functions(self):
        values = [M31(7)]
        left, right = sha256(b"l"), sha256(b"r")
        assert DEFAULT_HASHER.hash_leaf(values) == hash_leaf(values)
        assert DEFAULT_HASHER.hash_children(left, right) == hash_children(left, right)


class TestHexConversion:
    """Tests for to_hex/from_hex."""

    def test_round_trip(self):
        data = bytes.fromhex("deadbeef")
        assert to_hex(data) == "0xdeadbeef"
        assert from_hex(to_hex(data)) == data

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
