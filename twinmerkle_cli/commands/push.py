"""
CLI Push Command

Print the linearized push sequence of a twin proof document: left leaf
elements, right leaf elements, then sibling hashes.

Usage:
    twinmerkle push proof.json [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from twinmerkle.merkle.documents import TwinProofDocument, load_document
from twinmerkle.schemas.errors import TwinMerkleException
from twinmerkle.script.pushable import PushKind, linearize_twin_proof
from twinmerkle_cli.commands import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


def push_cmd(args: Namespace) -> int:
    """Execute the push command."""
    try:
        document = load_document(args.proof, TwinProofDocument)
    except (FileNotFoundError, TwinMerkleException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    items = linearize_twin_proof(document.to_proof())

    if args.json:
        print(json.dumps([item.to_dict() for item in items], indent=2))
        return EXIT_SUCCESS

    for item in items:
        if item.kind == PushKind.BYTES:
            print(f"<0x{item.value.hex()}>")
        else:
            print(item.value)
    return EXIT_SUCCESS
