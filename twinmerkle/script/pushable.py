"""
Script - Proof Linearization
Flattens proofs into an ordered sequence of atomic push items for an
external stack-machine verifier.

Push Order (Hard Contract):
1. Every field element of proof.left, in order
2. Every field element of proof.right, in order
3. Every hash of proof.siblings, bottom-up

Field elements are pushed as numbers, hashes as 32-byte strings. Encoding the
items into concrete opcodes is left to the script backend.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from twinmerkle.fields.m31 import M31
from twinmerkle.merkle.merkle_tree import TwinProof


class PushKind(str, Enum):
    """Kind of a single push item."""
    NUMBER = "number"
    BYTES = "bytes"


@dataclass(frozen=True)
class ScriptPush:
    """One atomic push: a number or a byte string."""
    kind: PushKind
    value: Union[int, bytes]

    def __post_init__(self) -> None:
        if self.kind == PushKind.NUMBER and not isinstance(self.value, int):
            raise TypeError("NUMBER push requires an int value")
        if self.kind == PushKind.BYTES and not isinstance(self.value, bytes):
            raise TypeError("BYTES push requires a bytes value")

    def to_dict(self) -> dict[str, Union[int, str]]:
        if self.kind == PushKind.BYTES:
            return {"kind": self.kind.value, "value": "0x" + self.value.hex()}
        return {"kind": self.kind.value, "value": self.value}


class ScriptBuilder:
    """
    Accumulates push items in order.

    Push helpers return the builder so calls can be chained, matching how
    script backends thread a builder through nested structures.
    """

    def __init__(self) -> None:
        self._items: list[ScriptPush] = []

    def push_int(self, value: int) -> "ScriptBuilder":
        self._items.append(ScriptPush(PushKind.NUMBER, value))
        return self

    def push_bytes(self, value: bytes) -> "ScriptBuilder":
        self._items.append(ScriptPush(PushKind.BYTES, bytes(value)))
        return self

    @property
    def items(self) -> list[ScriptPush]:
        return list(self._items)

    def __iter__(self) -> Iterator[ScriptPush]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


def push_field_element(builder: ScriptBuilder, value: M31) -> ScriptBuilder:
    return builder.push_int(value.value)


def push_hash(builder: ScriptBuilder, digest: bytes) -> ScriptBuilder:
    return builder.push_bytes(digest)


def push_twin_proof(builder: ScriptBuilder, proof: TwinProof) -> ScriptBuilder:
    """Append a twin proof to builder: left, then right, then siblings."""
    for v in proof.left:
        builder = push_field_element(builder, v)
    for v in proof.right:
        builder = push_field_element(builder, v)
    for digest in proof.siblings:
        builder = push_hash(builder, digest)
    return builder


def linearize_twin_proof(proof: TwinProof) -> list[ScriptPush]:
    """Flatten a twin proof into its ordered push items."""
    return push_twin_proof(ScriptBuilder(), proof).items


__all__ = [
    "PushKind",
    "ScriptPush",
    "ScriptBuilder",
    "push_field_element",
    "push_hash",
    "push_twin_proof",
    "linearize_twin_proof",
]
