"""
Schemas - Errors, Versioning & Canonicalization

Purpose: Export the shared serialization and error API.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    SchemaVersion,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
    is_compatible_schema_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    ErrorCodes,
    TwinMerkleError,
    TwinMerkleException,
    ContractViolation,
    CanonicalizationException,
    SchemaValidationException,
    MerkleVerificationException,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "SchemaVersion",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    "is_compatible_schema_version",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "ErrorCodes",
    "TwinMerkleError",
    "TwinMerkleException",
    "ContractViolation",
    "CanonicalizationException",
    "SchemaValidationException",
    "MerkleVerificationException",
]
