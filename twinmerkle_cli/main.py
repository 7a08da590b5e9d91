"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m twinmerkle_cli commit <leaves.json> [--out PATH] [--json]
    python -m twinmerkle_cli prove <leaves.json> --index Q [--out PATH]
    python -m twinmerkle_cli verify <proof.json> [--commitment PATH] [--root HEX]
                                                 [--depth N] [--index Q] [--json]
    python -m twinmerkle_cli push <proof.json> [--json]
    python -m twinmerkle_cli config --show

Environment Variables:
    TWINMERKLE_PARALLEL             Enable threaded layer hashing (default: false)
    TWINMERKLE_PARALLEL_THRESHOLD   Hash jobs per layer before threading (default: 1024)
    TWINMERKLE_MAX_WORKERS          Thread pool size (default: 4)
    TWINMERKLE_LOG_LEVEL            Log level (default: INFO)
    TWINMERKLE_LOG_FILE             Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from twinmerkle.config.runtime import RuntimeConfig, get_default_config, set_default_config
from twinmerkle_cli import __version__
from twinmerkle_cli.commands import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    commit,
    prove,
    push,
    verify,
)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def load_config(path: Path | None) -> RuntimeConfig:
    """
    Load configuration from a YAML file and/or environment.

    Environment variables override file settings.
    """
    if path is not None:
        return RuntimeConfig.from_yaml(path).with_env_overrides()
    return RuntimeConfig.from_env()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="twinmerkle",
        description="Commit to field-element leaves and produce or verify twin Merkle proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- commit command ---
    commit_parser = subparsers.add_parser(
        "commit",
        help="Build a tree and print its commitment",
        description="Build a Merkle tree over a leaf set and report root and depth.",
    )
    commit_parser.add_argument(
        "leaves",
        type=str,
        help='Leaf set JSON file: {"leaves": [[...], ...]}',
    )
    commit_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the commitment document to this path",
    )
    commit_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    commit_parser.set_defaults(func=commit.commit_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate a twin proof",
        description="Generate the twin proof for leaves (index, index + 1).",
    )
    prove_parser.add_argument("leaves", type=str, help="Leaf set JSON file")
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="Even index of the left leaf",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this path (default: stdout)",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a twin proof offline",
        description="Recompute the root from a twin proof and compare.",
    )
    verify_parser.add_argument("proof", type=str, help="Proof document JSON file")
    verify_parser.add_argument(
        "--commitment",
        type=str,
        default=None,
        help="Commitment document providing the trusted root and depth",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted 0x-prefixed root hash",
    )
    verify_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Trusted tree depth (layer count)",
    )
    verify_parser.add_argument(
        "--index",
        type=int,
        default=None,
        help="Leaf index to check (default: index in the proof document)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- push command ---
    push_parser = subparsers.add_parser(
        "push",
        help="Print the push sequence of a proof",
        description="Linearize a proof: left leaf, right leaf, then siblings.",
    )
    push_parser.add_argument("proof", type=str, help="Proof document JSON file")
    push_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    push_parser.set_defaults(func=push.push_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(get_default_config().to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: twinmerkle config --show")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    set_default_config(config)

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.log_file)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
