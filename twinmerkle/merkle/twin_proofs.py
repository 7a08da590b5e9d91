"""
Merkle - Twin Proof Convenience Wrappers
Thin class-based interfaces over the functions in merkle_tree.py.

- TwinProver: Commit to leaves and generate twin proofs
- TwinVerifier: Verify twin proofs, optionally raising on mismatch
"""
from __future__ import annotations

from typing import Optional, Sequence

from twinmerkle.crypto.hashing import MerkleHasher
from twinmerkle.fields.m31 import M31Like
from twinmerkle.merkle.documents import TreeCommitment, TwinProofDocument
from twinmerkle.merkle.merkle_tree import (
    MerkleTree,
    TwinProof,
    build_merkle_tree,
    query_twin_proof,
    verify_twin_proof,
)
from twinmerkle.schemas.errors import MerkleVerificationException


class TwinProver:
    """
    Convenience class for committing to leaves and generating twin proofs.

    Example:
        >>> prover = TwinProver([[1], [2], [3], [4]])
        >>> proof = prover.prove(2)
        >>> proof.left, proof.right
        ((M31(3),), (M31(4),))
    """

    def __init__(
        self,
        leaves: Sequence[Sequence[M31Like]],
        *,
        hasher: Optional[MerkleHasher] = None,
    ) -> None:
        self._tree = build_merkle_tree(leaves, hasher=hasher)

    @property
    def tree(self) -> MerkleTree:
        return self._tree

    @property
    def root(self) -> bytes:
        return self._tree.root

    @property
    def depth(self) -> int:
        return self._tree.depth

    def commit(self) -> TreeCommitment:
        """Public commitment (root, depth, sizes) for this tree."""
        return TreeCommitment.from_tree(self._tree)

    def prove(self, index: int) -> TwinProof:
        """
        Generate the twin proof for leaves (index, index + 1).

        Raises:
            ContractViolation: If index is odd or out of range
        """
        return query_twin_proof(self._tree, index)

    def prove_document(self, index: int) -> TwinProofDocument:
        """Generate a twin proof wrapped with root, depth and index."""
        return TwinProofDocument.from_tree(self._tree, index)


class TwinVerifier:
    """
    Convenience class for verifying twin proofs against a trusted root.

    Example:
        >>> verifier = TwinVerifier(prover.root, prover.depth)
        >>> verifier.verify(prover.prove(2), 2)
        True
    """

    def __init__(
        self,
        root: bytes,
        depth: int,
        *,
        hasher: Optional[MerkleHasher] = None,
    ) -> None:
        self.root = root
        self.depth = depth
        self._hasher = hasher

    @classmethod
    def from_commitment(
        cls,
        commitment: TreeCommitment,
        *,
        hasher: Optional[MerkleHasher] = None,
    ) -> "TwinVerifier":
        return cls(commitment.root_bytes, commitment.depth, hasher=hasher)

    def verify(self, proof: TwinProof, index: int) -> bool:
        """
        Verify a twin proof.

        Returns:
            True if the proof opens leaves (index, index + 1) under the root

        Raises:
            ContractViolation: If the proof shape or index breaks a precondition
        """
        return verify_twin_proof(self.root, self.depth, proof, index, hasher=self._hasher)

    def verify_document(self, document: TwinProofDocument) -> bool:
        """
        Verify a proof document against this verifier's trusted root.

        The root carried inside the document is ignored; a document with a
        different depth is rejected as a contract violation by verify().
        """
        return self.verify(document.to_proof(), document.index)

    def require_valid(self, proof: TwinProof, index: int) -> None:
        """
        Verify a twin proof and raise if it does not match.

        Raises:
            MerkleVerificationException: If the recomputed root differs
        """
        if not self.verify(proof, index):
            raise MerkleVerificationException(
                f"Twin proof for leaves ({index}, {index + 1}) does not match root",
                leaf_index=index,
                details={"root": "0x" + self.root.hex(), "depth": self.depth},
            )


__all__ = [
    "TwinProver",
    "TwinVerifier",
]
