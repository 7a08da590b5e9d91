"""
CLI command modules.
"""

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

from twinmerkle_cli.commands import commit, prove, verify, push  # noqa: E402

__all__ = [
    "EXIT_SUCCESS",
    "EXIT_RUNTIME_ERROR",
    "EXIT_VERIFICATION_FAILED",
    "commit",
    "prove",
    "verify",
    "push",
]
