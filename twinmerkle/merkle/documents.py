"""
Merkle - Commitment and Proof Documents

JSON-transportable forms of a tree commitment and a twin proof, so a prover
and an independent verifier can exchange them as files.

Hashes travel as 0x-prefixed lowercase hex, field elements as plain integers.
Files are written with canonical JSON (sorted keys, no whitespace).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from twinmerkle.crypto.hashing import MerkleHasher, from_hex, to_hex
from twinmerkle.fields.m31 import M31_MODULUS
from twinmerkle.merkle.merkle_tree import (
    MerkleTree,
    TwinProof,
    is_power_of_two,
    query_twin_proof,
    verify_twin_proof,
)
from twinmerkle.schemas.canonical import dumps_canonical
from twinmerkle.schemas.errors import SchemaValidationException
from twinmerkle.schemas.versioning import SCHEMA_VERSION, assert_supported_schema_version


# Regex pattern for validating hex strings (0x followed by 64 hex chars = 32 bytes)
HEX_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")

_D = TypeVar("_D", bound=BaseModel)


def validate_hex_hash(value: str, field_name: str) -> str:
    """Validate that a value is a valid 32-byte hex hash with 0x prefix."""
    if not HEX_HASH_PATTERN.match(value):
        shown = value[:20] + "..." if len(value) > 20 else value
        raise ValueError(
            f"{field_name} must be a valid 32-byte hex string with 0x prefix "
            f"(64 hex chars), got: {shown}"
        )
    return value.lower()


def validate_field_values(values: list[int], field_name: str) -> list[int]:
    """Validate that every value is a canonical M31 integer."""
    for i, v in enumerate(values):
        if not 0 <= v < M31_MODULUS:
            raise ValueError(
                f"{field_name}[{i}] must be in [0, {M31_MODULUS}), got {v}"
            )
    return values


class LeafSet(BaseModel):
    """Input document: the ordered leaves to commit to."""

    model_config = ConfigDict(extra="forbid")

    leaves: list[list[int]] = Field(
        ...,
        description="Leaves, each an ordered list of M31 integers",
    )

    @field_validator("leaves")
    @classmethod
    def _check_leaves(cls, v: list[list[int]]) -> list[list[int]]:
        for i, leaf in enumerate(v):
            validate_field_values(leaf, f"leaves[{i}]")
        return v

    def build_tree(
        self,
        *,
        hasher: Optional[MerkleHasher] = None,
    ) -> MerkleTree:
        """Build the tree over these leaves."""
        return MerkleTree.build(self.leaves, hasher=hasher)


class TreeCommitment(BaseModel):
    """Public commitment to a built tree."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    num_leaves: int = Field(..., ge=2)
    leaf_width: int = Field(..., ge=0)
    depth: int = Field(..., ge=1, description="Hash layer count, log2(num_leaves)")
    root: str = Field(..., description="0x-prefixed root hash")

    @field_validator("schema_version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("root")
    @classmethod
    def _check_root(cls, v: str) -> str:
        return validate_hex_hash(v, "root")

    @model_validator(mode="after")
    def _check_depth(self) -> "TreeCommitment":
        if not is_power_of_two(self.num_leaves):
            raise ValueError(f"num_leaves must be a power of two, got {self.num_leaves}")
        if self.depth != self.num_leaves.bit_length() - 1:
            raise ValueError(
                f"depth {self.depth} does not match num_leaves {self.num_leaves}"
            )
        return self

    @classmethod
    def from_tree(cls, tree: MerkleTree) -> "TreeCommitment":
        return cls(
            num_leaves=tree.num_leaves,
            leaf_width=tree.leaf_width,
            depth=tree.depth,
            root=to_hex(tree.root),
        )

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)


class TwinProofDocument(BaseModel):
    """A twin proof together with the public data needed to check it."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    index: int = Field(..., ge=0, description="Even index of the left leaf")
    depth: int = Field(..., ge=1, description="Hash layer count of the tree")
    root: str = Field(..., description="0x-prefixed root hash")
    left: list[int] = Field(..., description="Leaf at index")
    right: list[int] = Field(..., description="Leaf at index + 1")
    siblings: list[str] = Field(
        default_factory=list,
        description="0x-prefixed co-path hashes, bottom-up",
    )

    @field_validator("schema_version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("root")
    @classmethod
    def _check_root(cls, v: str) -> str:
        return validate_hex_hash(v, "root")

    @field_validator("siblings")
    @classmethod
    def _check_siblings(cls, v: list[str]) -> list[str]:
        return [validate_hex_hash(s, f"siblings[{i}]") for i, s in enumerate(v)]

    @field_validator("left", "right")
    @classmethod
    def _check_leaf(cls, v: list[int], info: ValidationInfo) -> list[int]:
        return validate_field_values(v, info.field_name)

    @model_validator(mode="after")
    def _check_shape(self) -> "TwinProofDocument":
        # Sibling count bounds depth before anything is sized by it
        if len(self.siblings) != self.depth - 1:
            raise ValueError(
                f"depth {self.depth} requires {self.depth - 1} siblings, "
                f"got {len(self.siblings)}"
            )
        if self.index % 2 != 0:
            raise ValueError(f"index must be even, got {self.index}")
        if self.index.bit_length() > self.depth:
            raise ValueError(
                f"index {self.index} out of range for depth {self.depth}"
            )
        if len(self.left) != len(self.right):
            raise ValueError("left and right leaves must have the same width")
        return self

    @classmethod
    def from_proof(
        cls,
        proof: TwinProof,
        *,
        root: bytes,
        depth: int,
        index: int,
    ) -> "TwinProofDocument":
        return cls(
            index=index,
            depth=depth,
            root=to_hex(root),
            left=[v.value for v in proof.left],
            right=[v.value for v in proof.right],
            siblings=[to_hex(s) for s in proof.siblings],
        )

    @classmethod
    def from_tree(cls, tree: MerkleTree, index: int) -> "TwinProofDocument":
        """Query tree at index and wrap the proof with its public data."""
        proof = query_twin_proof(tree, index)
        return cls.from_proof(proof, root=tree.root, depth=tree.depth, index=index)

    def to_proof(self) -> TwinProof:
        return TwinProof(
            left=tuple(self.left),
            right=tuple(self.right),
            siblings=tuple(from_hex(s) for s in self.siblings),
        )

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    def verify(
        self,
        *,
        root: Optional[bytes] = None,
        hasher: Optional[MerkleHasher] = None,
    ) -> bool:
        """
        Verify the embedded proof.

        Args:
            root: Trusted root to check against. Defaults to the root carried
                  in the document, which only proves internal consistency.
            hasher: Hash collaborator (default: tagged SHA-256)
        """
        expected = root if root is not None else self.root_bytes
        return verify_twin_proof(
            expected, self.depth, self.to_proof(), self.index, hasher=hasher
        )


def dump_document(document: BaseModel) -> str:
    """Serialize a document to canonical JSON."""
    return dumps_canonical(document.model_dump(mode="json"))


def parse_document(data: str, model: Type[_D]) -> _D:
    """
    Parse and validate a JSON document.

    Raises:
        SchemaValidationException: If the JSON is malformed or invalid
    """
    try:
        return model.model_validate_json(data)
    except ValidationError as e:
        errors = e.errors()
        field_path = ".".join(str(p) for p in errors[0]["loc"]) if errors else None
        raise SchemaValidationException(
            message=f"Invalid {model.__name__}: {e.error_count()} validation error(s)",
            field_path=field_path or None,
            details={"errors": [err["msg"] for err in errors]},
        ) from e


def load_document(path: str | Path, model: Type[_D]) -> _D:
    """Read and validate a JSON document from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    return parse_document(path.read_text(encoding="utf-8"), model)


def save_document(document: BaseModel, path: str | Path) -> Path:
    """Write a document to disk as canonical JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_document(document), encoding="utf-8")
    return path


__all__ = [
    "HEX_HASH_PATTERN",
    "validate_hex_hash",
    "validate_field_values",
    "LeafSet",
    "TreeCommitment",
    "TwinProofDocument",
    "dump_document",
    "parse_document",
    "load_document",
    "save_document",
]
