"""
CLI Commit Command

Build a tree over a leaf set and report (or save) its commitment.

Usage:
    twinmerkle commit leaves.json [--out commitment.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from twinmerkle.merkle.documents import (
    LeafSet,
    TreeCommitment,
    load_document,
    save_document,
)
from twinmerkle.schemas.errors import TwinMerkleException
from twinmerkle_cli.commands import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


logger = logging.getLogger(__name__)


def print_commitment_human(commitment: TreeCommitment) -> None:
    print(f"root: {commitment.root}")
    print(f"depth: {commitment.depth}")
    print(f"num_leaves: {commitment.num_leaves}")
    print(f"leaf_width: {commitment.leaf_width}")


def commit_cmd(args: Namespace) -> int:
    """
    Execute the commit command.

    Returns:
        Exit code
    """
    try:
        leaf_set = load_document(args.leaves, LeafSet)
        logger.info(f"Committing to {len(leaf_set.leaves)} leaves from {args.leaves}")
        commitment = TreeCommitment.from_tree(leaf_set.build_tree())
    except (FileNotFoundError, TwinMerkleException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.out:
        path = save_document(commitment, args.out)
        logger.info(f"Wrote commitment to {path}")

    if args.json:
        print(json.dumps(commitment.model_dump(mode="json"), indent=2))
    else:
        print_commitment_human(commitment)

    return EXIT_SUCCESS
