"""
Fields - M31 Base Field
Arithmetic over the Mersenne-31 prime field, p = 2^31 - 1.

This module provides:
- M31: Immutable field element with +, -, *, negation, inverse and pow
- Fixed-width serialization (4 bytes, little-endian) used for leaf hashing

Determinism Notes:
- Elements are always stored in canonical form (0 <= value < p)
- to_bytes() is the only encoding fed into leaf hashes
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Union


# Modulus of the base field
M31_MODULUS: int = (1 << 31) - 1

# Serialized size of one element in bytes
M31_BYTE_SIZE: int = 4


@dataclass(frozen=True)
class M31:
    """
    An element of the Mersenne-31 prime field.

    Attributes:
        value: Canonical integer representative in [0, p)
    """
    value: int

    def __post_init__(self) -> None:
        """Validate canonical form."""
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"M31 value must be an int, got {type(self.value).__name__}"
            )
        if not 0 <= self.value < M31_MODULUS:
            raise ValueError(
                f"M31 value must be in [0, {M31_MODULUS}), got {self.value}"
            )

    @classmethod
    def reduce(cls, value: int) -> "M31":
        """Build an element from an arbitrary integer, reducing mod p."""
        return cls(value % M31_MODULUS)

    @classmethod
    def zero(cls) -> "M31":
        return cls(0)

    @classmethod
    def one(cls) -> "M31":
        return cls(1)

    @classmethod
    def random(cls, rng: random.Random) -> "M31":
        """Sample a uniformly random element from the given generator."""
        return cls(rng.randrange(M31_MODULUS))

    def __add__(self, other: "M31Like") -> "M31":
        return M31.reduce(self.value + _as_int(other))

    __radd__ = __add__

    def __sub__(self, other: "M31Like") -> "M31":
        return M31.reduce(self.value - _as_int(other))

    def __rsub__(self, other: "M31Like") -> "M31":
        return M31.reduce(_as_int(other) - self.value)

    def __mul__(self, other: "M31Like") -> "M31":
        return M31.reduce(self.value * _as_int(other))

    __rmul__ = __mul__

    def __neg__(self) -> "M31":
        return M31.reduce(-self.value)

    def __pow__(self, exponent: int) -> "M31":
        if exponent < 0:
            return self.inverse() ** (-exponent)
        return M31(pow(self.value, exponent, M31_MODULUS))

    def __truediv__(self, other: "M31Like") -> "M31":
        return self * M31.reduce(_as_int(other)).inverse()

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"M31({self.value})"

    def is_zero(self) -> bool:
        return self.value == 0

    def inverse(self) -> "M31":
        """
        Multiplicative inverse via Fermat's little theorem.

        Raises:
            ZeroDivisionError: If the element is zero
        """
        if self.value == 0:
            raise ZeroDivisionError("M31 zero has no inverse")
        return M31(pow(self.value, M31_MODULUS - 2, M31_MODULUS))

    def to_bytes(self) -> bytes:
        """Serialize as 4 little-endian bytes."""
        return self.value.to_bytes(M31_BYTE_SIZE, "little")

    @classmethod
    def from_bytes(cls, data: bytes) -> "M31":
        """
        Deserialize from 4 little-endian bytes.

        Raises:
            ValueError: If data has the wrong length or is not canonical
        """
        if len(data) != M31_BYTE_SIZE:
            raise ValueError(
                f"M31 encoding must be {M31_BYTE_SIZE} bytes, got {len(data)}"
            )
        return cls(int.from_bytes(data, "little"))


M31Like = Union[M31, int]


def _as_int(value: M31Like) -> int:
    if isinstance(value, M31):
        return value.value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"Unsupported operand type for M31: {type(value).__name__}")


def to_m31(value: M31Like) -> M31:
    """
    Coerce an int or M31 into an M31 element.

    Integers must already be canonical; use M31.reduce() for wrap-around.
    """
    if isinstance(value, M31):
        return value
    return M31(value)


__all__ = [
    "M31_MODULUS",
    "M31_BYTE_SIZE",
    "M31",
    "M31Like",
    "to_m31",
]
