"""
Common test fixtures shared by all modules.

Provides seeded factory functions, so every test sees the same leaves:
- Leaf sets built from random QM31 values (4 M31 coordinates per leaf)
- Small integer leaf sets for hand-checked examples
- Trees and proof documents over those leaves
"""

import json
import random
from pathlib import Path
from typing import Optional

from twinmerkle.config.runtime import MerkleConfig
from twinmerkle.fields.m31 import M31
from twinmerkle.fields.qm31 import QM31
from twinmerkle.merkle.documents import TwinProofDocument
from twinmerkle.merkle.merkle_tree import MerkleTree, build_merkle_tree


# Sequential building keeps unit tests independent of thread scheduling
SEQUENTIAL = MerkleConfig(parallel=False)


def make_qm31_leaves(num_leaves: int = 16, seed: int = 0) -> list[list[M31]]:
    """Leaves made of random QM31 values flattened to 4 M31 coordinates."""
    rng = random.Random(seed)
    return [list(QM31.random(rng).to_m31_array()) for _ in range(num_leaves)]


def make_int_leaves(num_leaves: int = 4, width: int = 2) -> list[list[int]]:
    """Deterministic small-integer leaves: leaf i is [i*width, ..., i*width + width - 1]."""
    return [[i * width + j for j in range(width)] for i in range(num_leaves)]


def make_tree(
    num_leaves: int = 16,
    seed: int = 0,
    config: Optional[MerkleConfig] = None,
) -> MerkleTree:
    return build_merkle_tree(make_qm31_leaves(num_leaves, seed), config=config or SEQUENTIAL)


def make_proof_document(
    num_leaves: int = 8,
    index: int = 2,
    seed: int = 0,
) -> TwinProofDocument:
    return TwinProofDocument.from_tree(make_tree(num_leaves, seed), index)


def write_leaf_set(path: Path, leaves: list[list[int]]) -> Path:
    """Write a leaf set JSON file for CLI tests."""
    path.write_text(json.dumps({"leaves": leaves}), encoding="utf-8")
    return path
