"""
Merkle - Twin Merkle Tree
Tree construction over field-element leaves, twin proof extraction,
and twin proof verification.

This module provides:
- MerkleTree: Immutable tree holding leaves, intermediate layers and root
- TwinProof: Membership proof for the adjacent leaf pair (q, q+1)
- build_merkle_tree / query_twin_proof / verify_twin_proof

Commitment Rules (Hard Contracts):
1. Leaf count N is a power of two and N >= 2
2. layers[0][k] = node(leaf(leaves[2k]), leaf(leaves[2k+1]))
3. layers[i+1][k] = node(layers[i][2k], layers[i][2k+1])
4. len(layers) == log2(N); root == layers[-1][0]
5. A twin proof carries one sibling per layer except the root layer

Ordering Rule:
- At every level the node at an even index is the left input of its parent.
  The verifier places the sibling on the right when the running index is
  even and on the left when it is odd.

Any precondition failure raises ContractViolation. A proof that does not
match the root is not an error: verify_twin_proof returns False.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, TypeVar

from twinmerkle.config.runtime import MerkleConfig, get_default_config
from twinmerkle.crypto.hashing import DEFAULT_HASHER, MerkleHasher
from twinmerkle.fields.m31 import M31, M31Like, to_m31
from twinmerkle.schemas.errors import ContractViolation


logger = logging.getLogger(__name__)

# A committed leaf: an ordered tuple of field elements
LeafRecord = tuple[M31, ...]

_J = TypeVar("_J")


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and n & (n - 1) == 0


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of hash layers of a tree with num_leaves leaves.

    Equals log2(num_leaves); the leaf layer itself is not counted.
    Two leaves have depth 1, four leaves depth 2, and so on.

    Raises:
        ContractViolation: If num_leaves is not a power of two >= 2
    """
    if num_leaves < 2 or not is_power_of_two(num_leaves):
        raise ContractViolation(
            f"Leaf count must be a power of two >= 2, got {num_leaves}",
            contract="leaf_count_power_of_two",
            details={"num_leaves": num_leaves},
        )
    return num_leaves.bit_length() - 1


@dataclass(frozen=True)
class TwinProof:
    """
    Membership proof for the leaves at q and q+1 (q even).

    Attributes:
        left: Leaf at the even index q
        right: Leaf at q+1
        siblings: Co-path hashes bottom-up, one per layer from layers[0]
                  through layers[depth-2]; the root layer is implicit
    """
    left: LeafRecord
    right: LeafRecord
    siblings: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        """Normalize to immutable tuples."""
        object.__setattr__(self, "left", tuple(to_m31(v) for v in self.left))
        object.__setattr__(self, "right", tuple(to_m31(v) for v in self.right))
        object.__setattr__(self, "siblings", tuple(bytes(s) for s in self.siblings))

    @property
    def depth(self) -> int:
        """Layer count of the tree this proof claims to come from."""
        return len(self.siblings) + 1


@dataclass(frozen=True)
class MerkleTree:
    """
    Immutable binary Merkle tree over field-element leaves.

    Build with MerkleTree.build(leaves) or build_merkle_tree(leaves).
    Once built, a tree is read-only and may be shared across threads.

    Example:
        >>> tree = MerkleTree.build([[1, 2], [3, 4], [5, 6], [7, 8]])
        >>> tree.depth
        2
        >>> proof = tree.query(2)
        >>> MerkleTree.verify_twin(tree.root, tree.depth, proof, 2)
        True
    """
    leaves: tuple[LeafRecord, ...] = field(repr=False)
    layers: tuple[tuple[bytes, ...], ...] = field(repr=False)

    def __post_init__(self) -> None:
        """Check the layering invariant."""
        depth = compute_tree_depth(len(self.leaves))
        if len(self.layers) != depth:
            raise ContractViolation(
                f"Tree over {len(self.leaves)} leaves needs {depth} layers, "
                f"got {len(self.layers)}",
                contract="layer_count",
            )
        expected = len(self.leaves) // 2
        for i, layer in enumerate(self.layers):
            if len(layer) != expected:
                raise ContractViolation(
                    f"Layer {i} must hold {expected} hashes, got {len(layer)}",
                    contract="layer_width",
                )
            expected //= 2

    @classmethod
    def build(
        cls,
        leaves: Sequence[Sequence[M31Like]],
        *,
        hasher: Optional[MerkleHasher] = None,
        config: Optional[MerkleConfig] = None,
    ) -> "MerkleTree":
        """Alias for build_merkle_tree()."""
        return build_merkle_tree(leaves, hasher=hasher, config=config)

    @property
    def root(self) -> bytes:
        return self.layers[-1][0]

    @property
    def depth(self) -> int:
        """Number of hash layers, log2(num_leaves)."""
        return len(self.layers)

    @property
    def num_leaves(self) -> int:
        return len(self.leaves)

    @property
    def leaf_width(self) -> int:
        """Number of field elements per leaf."""
        return len(self.leaves[0])

    def query(self, index: int) -> TwinProof:
        """Alias for query_twin_proof(self, index)."""
        return query_twin_proof(self, index)

    @staticmethod
    def verify_twin(
        root: bytes,
        depth: int,
        proof: TwinProof,
        index: int,
        *,
        hasher: Optional[MerkleHasher] = None,
    ) -> bool:
        """Alias for verify_twin_proof()."""
        return verify_twin_proof(root, depth, proof, index, hasher=hasher)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(num_leaves={self.num_leaves}, depth={self.depth}, "
            f"root=0x{self.root.hex()})"
        )


def _normalize_leaves(leaves: Sequence[Sequence[M31Like]]) -> tuple[LeafRecord, ...]:
    """Copy leaves into tuples of M31 and enforce count and width contracts."""
    compute_tree_depth(len(leaves))

    leaf_layer = tuple(tuple(to_m31(v) for v in leaf) for leaf in leaves)

    width = len(leaf_layer[0])
    for i, leaf in enumerate(leaf_layer):
        if len(leaf) != width:
            raise ContractViolation(
                f"All leaves must have the same width; leaf 0 has {width} "
                f"elements, leaf {i} has {len(leaf)}",
                contract="uniform_leaf_width",
                details={"expected": width, "actual": len(leaf), "leaf_index": i},
            )
    return leaf_layer


def _pairs(items: Sequence[_J]) -> list[tuple[_J, _J]]:
    """Consecutive disjoint pairs (items[2k], items[2k+1])."""
    return [(items[i], items[i + 1]) for i in range(0, len(items), 2)]


def _hash_layer(
    fn: Callable[[_J], bytes],
    jobs: Sequence[_J],
    executor: Optional[ThreadPoolExecutor],
    config: MerkleConfig,
) -> tuple[bytes, ...]:
    """
    Hash every job of one layer.

    Jobs within a layer are independent. executor.map returns in input order
    and tuple() waits for all of them, so the next layer never starts early.
    """
    if executor is not None and config.use_pool(len(jobs)):
        return tuple(executor.map(fn, jobs))
    return tuple(fn(job) for job in jobs)


def build_merkle_tree(
    leaves: Sequence[Sequence[M31Like]],
    *,
    hasher: Optional[MerkleHasher] = None,
    config: Optional[MerkleConfig] = None,
) -> MerkleTree:
    """
    Build a Merkle tree from a leaf set.

    Algorithm:
    1. Layer 0: for each pair (leaves[2k], leaves[2k+1]), hash both leaves
       in leaf mode and combine the two digests in node mode
    2. While the last layer has more than one hash, pair it up and hash
       each pair in node mode; append every layer including the root layer

    Args:
        leaves: Sequence of leaves, each a sequence of M31 (or canonical ints)
        hasher: Hash collaborator (default: tagged SHA-256)
        config: Scheduling options (default: runtime config)

    Returns:
        Immutable MerkleTree

    Raises:
        ContractViolation: If the leaf count is not a power of two >= 2,
                           or leaves differ in width
    """
    hasher = hasher or DEFAULT_HASHER
    config = config or get_default_config().merkle

    leaf_layer = _normalize_leaves(leaves)

    def hash_leaf_pair(pair: tuple[LeafRecord, LeafRecord]) -> bytes:
        return hasher.hash_children(hasher.hash_leaf(pair[0]), hasher.hash_leaf(pair[1]))

    def hash_node_pair(pair: tuple[bytes, bytes]) -> bytes:
        return hasher.hash_children(pair[0], pair[1])

    executor = (
        ThreadPoolExecutor(max_workers=config.max_workers)
        if config.use_pool(len(leaf_layer) // 2)
        else None
    )
    try:
        current = _hash_layer(hash_leaf_pair, _pairs(leaf_layer), executor, config)
        layers = [current]

        while len(current) > 1:
            current = _hash_layer(hash_node_pair, _pairs(current), executor, config)
            layers.append(current)
    finally:
        if executor is not None:
            executor.shutdown(wait=True)

    tree = MerkleTree(leaves=leaf_layer, layers=tuple(layers))

    logger.debug(
        f"Built Merkle tree with {tree.num_leaves} leaves, depth {tree.depth}, "
        f"parallel={executor is not None}"
    )
    return tree


def query_twin_proof(tree: MerkleTree, index: int) -> TwinProof:
    """
    Extract the twin proof for leaves (index, index + 1).

    Algorithm:
    1. left = leaves[index], right = leaves[index + 1]
    2. p = index // 2 (position of the pair's parent in layers[0])
    3. For each layer except the root layer: take layers[i][p ^ 1],
       then move up with p //= 2

    Args:
        tree: Built tree
        index: Even leaf index of the left member of the pair

    Returns:
        TwinProof with depth - 1 siblings

    Raises:
        ContractViolation: If index is odd or out of range
    """
    if index < 0 or index >= tree.num_leaves:
        raise ContractViolation(
            f"Query index {index} out of range [0, {tree.num_leaves})",
            contract="query_index_in_range",
            details={"index": index, "num_leaves": tree.num_leaves},
        )
    if index & 1:
        raise ContractViolation(
            f"Query index must be even, got {index}",
            contract="query_index_even",
            details={"index": index},
        )

    siblings: list[bytes] = []
    position = index >> 1
    for layer in tree.layers[:-1]:
        siblings.append(layer[position ^ 1])
        position >>= 1

    return TwinProof(
        left=tree.leaves[index],
        right=tree.leaves[index + 1],
        siblings=tuple(siblings),
    )


def verify_twin_proof(
    root: bytes,
    depth: int,
    proof: TwinProof,
    index: int,
    *,
    hasher: Optional[MerkleHasher] = None,
) -> bool:
    """
    Verify a twin proof against a root.

    Algorithm:
    1. cur = node(leaf(left), leaf(right)); p = index // 2
    2. For each sibling (bottom-up):
       - p even: cur = node(cur, sibling)
       - p odd:  cur = node(sibling, cur)
       - p //= 2
    3. Compare cur with root

    Args:
        root: Claimed root hash
        depth: Layer count of the committed tree (log2 of leaf count)
        proof: TwinProof to check
        index: Even leaf index the proof claims to open
        hasher: Hash collaborator (default: tagged SHA-256)

    Returns:
        True if the recomputed root equals root, False otherwise

    Raises:
        ContractViolation: If depth does not match len(proof.siblings) + 1,
                           or index is negative or odd
    """
    if depth < 1 or len(proof.siblings) != depth - 1:
        raise ContractViolation(
            f"Proof carries {len(proof.siblings)} siblings but depth {depth} "
            f"requires {depth - 1}",
            contract="siblings_match_depth",
            details={"depth": depth, "siblings": len(proof.siblings)},
        )
    if index < 0 or index & 1:
        raise ContractViolation(
            f"Query index must be a non-negative even integer, got {index}",
            contract="query_index_even",
            details={"index": index},
        )
    if index >= 1 << depth:
        raise ContractViolation(
            f"Query index {index} out of range for a tree of depth {depth}",
            contract="query_index_in_range",
            details={"index": index, "num_leaves": 1 << depth},
        )

    hasher = hasher or DEFAULT_HASHER

    current = hasher.hash_children(hasher.hash_leaf(proof.left), hasher.hash_leaf(proof.right))
    position = index >> 1

    for sibling in proof.siblings:
        if position & 1 == 0:
            current = hasher.hash_children(current, sibling)
        else:
            current = hasher.hash_children(sibling, current)
        position >>= 1

    ok = current == root
    if not ok:
        logger.debug(f"Twin proof for index {index} does not match root 0x{root.hex()}")
    return ok


__all__ = [
    "LeafRecord",
    "TwinProof",
    "MerkleTree",
    "is_power_of_two",
    "compute_tree_depth",
    "build_merkle_tree",
    "query_twin_proof",
    "verify_twin_proof",
]
