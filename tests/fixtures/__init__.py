"""
Test fixtures package for twinmerkle tests.

This package provides factory functions for creating test objects:
- common.py: Leaf sets, trees and proof documents

Usage:
    from fixtures import make_qm31_leaves, make_tree

    def test_something():
        tree = make_tree(num_leaves=16)
"""

from .common import (
    SEQUENTIAL,
    make_qm31_leaves,
    make_int_leaves,
    make_tree,
    make_proof_document,
    write_leaf_set,
)

__all__ = [
    "SEQUENTIAL",
    "make_qm31_leaves",
    "make_int_leaves",
    "make_tree",
    "make_proof_document",
    "write_leaf_set",
]
