"""
Schemas - Errors
File: errors.py

Purpose: Error taxonomy for twinmerkle.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Two classes of failure exist:
- Contract violations (bad leaf count, odd query index, depth/siblings
  mismatch) raise ContractViolation and never yield a result.
- Verification mismatch is NOT an error: verify functions return False.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Caller programming errors
    CONTRACT_VIOLATION = "CONTRACT_VIOLATION"

    # Schema & Serialization Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    INVALID_INPUT = "INVALID_INPUT"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class TwinMerkleError(BaseModel):
    """
    Base error model for structured error reporting without raising.
    `twinmerkle verify --json` prints it when verification cannot run.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.CONTRACT_VIOLATION],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "TwinMerkleException":
        """Convert this error model to a raised exception."""
        return TwinMerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class TwinMerkleException(Exception):
    """
    Base exception for all twinmerkle errors.

    Carries structured error information and can be converted to a
    TwinMerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "TWINMERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> TwinMerkleError:
        """Convert this exception to a TwinMerkleError model."""
        return TwinMerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"retryable={self.retryable!r})"
        )


class ContractViolation(TwinMerkleException):
    """
    Raised when a caller breaks a precondition of the tree or proof engine.

    This is a programming error in the caller. It is never retryable and
    should not be caught to recover; it replaces a boolean result entirely.
    """

    def __init__(
        self,
        message: str,
        contract: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if contract:
            full_details["contract"] = contract
        super().__init__(
            message=message,
            code=ErrorCodes.CONTRACT_VIOLATION,
            details=full_details,
            retryable=False,
        )
        self.contract = contract


class CanonicalizationException(TwinMerkleException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class SchemaValidationException(TwinMerkleException):
    """Exception raised when a proof or leaf document fails validation."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


class MerkleVerificationException(TwinMerkleException):
    """Exception raised when a caller demands a valid proof and it is not."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
            retryable=False,
        )
