"""
CLI Prove Command

Build a tree over a leaf set and emit the twin proof for (index, index + 1).

Usage:
    twinmerkle prove leaves.json --index 6 [--out proof.json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from twinmerkle.merkle.documents import (
    LeafSet,
    TwinProofDocument,
    dump_document,
    load_document,
    save_document,
)
from twinmerkle.schemas.errors import TwinMerkleException
from twinmerkle_cli.commands import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Writes the proof document to --out, or to stdout when no path is given.

    Returns:
        Exit code
    """
    try:
        leaf_set = load_document(args.leaves, LeafSet)
        tree = leaf_set.build_tree()
        document = TwinProofDocument.from_tree(tree, args.index)
    except (FileNotFoundError, TwinMerkleException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(
        f"Generated twin proof for leaves ({args.index}, {args.index + 1}) "
        f"with {len(document.siblings)} siblings"
    )

    if args.out:
        path = save_document(document, args.out)
        print(f"Wrote proof to {path}")
    else:
        print(dump_document(document))

    return EXIT_SUCCESS
