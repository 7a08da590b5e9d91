"""
Cryptographic utilities.

Domain-separated SHA-256 hashing for the Merkle tree.
"""
from .hashing import (
    HASH_SIZE,
    HashMode,
    DOMAIN_TAGS,
    sha256,
    hash_node,
    encode_leaf,
    hash_leaf,
    hash_children,
    MerkleHasher,
    Sha256MerkleHasher,
    DEFAULT_HASHER,
    to_hex,
    from_hex,
)

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
