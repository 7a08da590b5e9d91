"""
CLI Verify Command

Verify a twin proof document offline.

The trusted root and depth come from, in order of precedence:
--root/--depth, then --commitment, then the proof document itself. Using the
document's own root only checks internal consistency.

Usage:
    twinmerkle verify proof.json [--commitment FILE] [--root HEX] [--depth N]
                                 [--index Q] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from twinmerkle.crypto.hashing import from_hex, to_hex
from twinmerkle.merkle.documents import (
    TreeCommitment,
    TwinProofDocument,
    load_document,
)
from twinmerkle.merkle.merkle_tree import verify_twin_proof
from twinmerkle.schemas.errors import (
    ContractViolation,
    ErrorCodes,
    TwinMerkleError,
    TwinMerkleException,
)
from twinmerkle_cli.commands import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    root: str = ""
    root_source: str = ""
    depth: int = 0
    index: int = 0
    ok: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def resolve_root(args: Namespace, document: TwinProofDocument) -> tuple[bytes, int, str]:
    """Pick the trusted root and depth, returning (root, depth, source)."""
    if args.root:
        depth = args.depth if args.depth is not None else document.depth
        return from_hex(args.root), depth, "argument"

    if args.commitment:
        commitment = load_document(args.commitment, TreeCommitment)
        depth = args.depth if args.depth is not None else commitment.depth
        return commitment.root_bytes, depth, "commitment"

    logger.warning("No trusted root given; checking the proof against its own root")
    depth = args.depth if args.depth is not None else document.depth
    return document.root_bytes, depth, "document"


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"root: {summary.root} ({summary.root_source})")
    print(f"depth: {summary.depth}")
    print(f"index: {summary.index}")
    print(f"ok: {str(summary.ok).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err}")


def print_summary_json(summary: VerifySummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def print_error(args: Namespace, error: Exception) -> None:
    """
    Report a failure that prevented verification.

    With --json the structured TwinMerkleError goes to stdout, otherwise a
    one-line message goes to stderr.
    """
    if not args.json:
        print(f"Error: {error}", file=sys.stderr)
        return

    if isinstance(error, TwinMerkleException):
        model = error.to_error_model()
    else:
        model = TwinMerkleError(
            code=ErrorCodes.INVALID_INPUT,
            message=str(error),
            details={"type": type(error).__name__},
        )
    print(json.dumps(model.model_dump(mode="json"), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if the proof is valid, 2 if it does not match the root,
        1 on IO errors, invalid documents or contract violations
    """
    try:
        document = load_document(args.proof, TwinProofDocument)
        root, depth, source = resolve_root(args, document)
    except (FileNotFoundError, ValueError, TwinMerkleException) as e:
        print_error(args, e)
        return EXIT_RUNTIME_ERROR

    index = args.index if args.index is not None else document.index
    summary = VerifySummary(
        proof_path=str(args.proof),
        root=to_hex(root),
        root_source=source,
        depth=depth,
        index=index,
    )

    try:
        summary.ok = verify_twin_proof(root, depth, document.to_proof(), index)
    except ContractViolation as e:
        print_error(args, e)
        return EXIT_RUNTIME_ERROR

    if not summary.ok:
        summary.errors.append(
            f"Recomputed root does not match for leaves ({index}, {index + 1})"
        )

    if args.json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.ok else EXIT_VERIFICATION_FAILED
