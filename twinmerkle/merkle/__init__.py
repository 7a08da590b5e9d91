"""
Merkle Tree and Twin Proofs
Binary Merkle commitments over field-element leaves with twin membership
proofs for adjacent leaf pairs.

This module provides:
- MerkleTree: Immutable tree (leaves, layers, root)
- TwinProof: Proof for leaves (q, q+1), q even
- build_merkle_tree / query_twin_proof / verify_twin_proof
- TreeCommitment / TwinProofDocument: JSON documents for exchange

Commitment Rules:
1. Leaf count is a power of two, at least 2
2. Leaf hash and node hash are domain separated (see twinmerkle.crypto)
3. len(layers) == log2(N); a twin proof has len(layers) - 1 siblings

Usage:
    from twinmerkle.merkle import MerkleTree

    tree = MerkleTree.build(leaves)
    proof = tree.query(6)
    assert MerkleTree.verify_twin(tree.root, tree.depth, proof, 6)
"""
from .merkle_tree import (
    LeafRecord,
    TwinProof,
    MerkleTree,
    is_power_of_two,
    compute_tree_depth,
    build_merkle_tree,
    query_twin_proof,
    verify_twin_proof,
)

from .documents import (
    LeafSet,
    TreeCommitment,
    TwinProofDocument,
    dump_document,
    parse_document,
    load_document,
    save_document,
)

from .twin_proofs import (
    TwinProver,
    TwinVerifier,
)


__all__ = [
    # Core types
    "LeafRecord",
    "TwinProof",
    "MerkleTree",
    # Core functions
    "is_power_of_two",
    "compute_tree_depth",
    "build_merkle_tree",
    "query_twin_proof",
    "verify_twin_proof",
    # Documents
    "LeafSet",
    "TreeCommitment",
    "TwinProofDocument",
    "dump_document",
    "parse_document",
    "load_document",
    "save_document",
    # Convenience classes
    "TwinProver",
    "TwinVerifier",
]
