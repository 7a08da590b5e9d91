"""
Schemas - Versioning
File: versioning.py

Purpose: Centralize document schema version constants.
Kept free of imports from other schema files to avoid circular dependencies.
"""

from typing import Literal

# Current schema version for commitment and proof documents
SCHEMA_VERSION: str = "v1"

# Type alias for schema version (future-proof for migrations)
SchemaVersion = Literal["v1"]

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({"v1"})


class UnsupportedSchemaVersionError(ValueError):
    """Raised when an unsupported schema version is encountered."""

    def __init__(self, version: str, supported: frozenset[str] | None = None) -> None:
        self.version = version
        self.supported = supported or SUPPORTED_SCHEMA_VERSIONS
        super().__init__(
            f"Unsupported schema version: '{version}'. "
            f"Supported versions: {sorted(self.supported)}"
        )


def assert_supported_schema_version(version: str) -> None:
    """
    Validate that the given schema version is supported.

    Raises:
        UnsupportedSchemaVersionError: If the version is not supported.
    """
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        raise UnsupportedSchemaVersionError(version)


def is_compatible_schema_version(version: str) -> bool:
    """Check if a schema version is compatible without raising."""
    return version in SUPPORTED_SCHEMA_VERSIONS
