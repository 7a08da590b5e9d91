"""
twinmerkle CLI

Command-line interface for committing to leaf sets and producing and
checking twin proofs.

Usage:
    python -m twinmerkle_cli commit leaves.json --out commitment.json
    python -m twinmerkle_cli prove leaves.json --index 6 --out proof.json
    python -m twinmerkle_cli verify proof.json --commitment commitment.json
    python -m twinmerkle_cli push proof.json
"""

__version__ = "0.1.0"
