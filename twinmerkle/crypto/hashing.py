"""
Crypto - Hashing Utilities
Domain-separated hashing for Merkle commitments over field elements.

This module provides:
- SHA-256 hashing for raw bytes
- hash_node: the tagged hash primitive used by the tree (leaf vs node mode)
- MerkleHasher protocol and the default Sha256MerkleHasher
- Hex encoding/decoding with 0x prefix

Domain Separation Rules (Hard Contracts):
1. Leaf hash: sha256(0x00 || le32(v_0) || le32(v_1) || ...)
2. Node hash: sha256(0x01 || left || right)
3. The mode tag is always the first payload byte; a leaf hash can never be
   interpreted as a node hash of the same raw bytes and vice versa.
"""
from __future__ import annotations

import hashlib
from enum import Enum
from typing import Protocol, Sequence, runtime_checkable

from twinmerkle.fields.m31 import M31


# Size of every digest produced by the tree
HASH_SIZE: int = 32


class HashMode(str, Enum):
    """Input context of a Merkle hash."""
    LEAF = "leaf"
    NODE = "node"


# One-byte tags prefixed to the payload, keyed by mode
DOMAIN_TAGS: dict[HashMode, bytes] = {
    HashMode.LEAF: b"\x00",
    HashMode.NODE: b"\x01",
}


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_node(mode: HashMode, payload: bytes) -> bytes:
    """
    Tagged hash primitive: sha256(tag(mode) || payload).

    Args:
        mode: HashMode.LEAF for raw leaf content, HashMode.NODE for two
              concatenated child hashes
        payload: Bytes to hash under that mode

    Returns:
        32-byte digest
    """
    return sha256(DOMAIN_TAGS[HashMode(mode)] + payload)


def encode_leaf(values: Sequence[M31]) -> bytes:
    """Concatenate the fixed-width encodings of a leaf's field elements."""
    return b"".join(v.to_bytes() for v in values)


def hash_leaf(values: Sequence[M31]) -> bytes:
    """Hash a leaf's raw field elements in leaf mode."""
    return hash_node(HashMode.LEAF, encode_leaf(values))


def hash_children(left: bytes, right: bytes) -> bytes:
    """
    Hash two child digests in node mode.

    The order is significant: parent(a, b) != parent(b, a).
    """
    return hash_node(HashMode.NODE, left + right)


@runtime_checkable
class MerkleHasher(Protocol):
    """Hash collaborator used by the tree builder and the verifier."""

    def hash_leaf(self, values: Sequence[M31]) -> bytes:
        ...

    def hash_children(self, left: bytes, right: bytes) -> bytes:
        ...


class Sha256MerkleHasher:
    """Default MerkleHasher built on the tagged SHA-256 primitive."""

    def hash_leaf(self, values: Sequence[M31]) -> bytes:
        return hash_leaf(values)

    def hash_children(self, left: bytes, right: bytes) -> bytes:
        return hash_children(left, right)

    def __repr__(self) -> str:
        return "Sha256MerkleHasher()"


DEFAULT_HASHER: MerkleHasher = Sha256MerkleHasher()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HASH_SIZE",
    "HashMode",
    "DOMAIN_TAGS",
    "sha256",
    "hash_node",
    "encode_leaf",
    "hash_leaf",
    "hash_children",
    "MerkleHasher",
    "Sha256MerkleHasher",
    "DEFAULT_HASHER",
    "to_hex",
    "from_hex",
]
