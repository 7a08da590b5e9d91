"""
Fields - Extension Fields
Complex extension CM31 = M31[i]/(i^2 + 1) and secure extension
QM31 = CM31[u]/(u^2 - 2 - i).

A QM31 element flattens to four M31 coordinates (a, b, c, d) meaning
(a + b*i) + (c + d*i)*u. Proof systems commit such values as 4-element leaves.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from twinmerkle.fields.m31 import M31, M31Like, to_m31


@dataclass(frozen=True)
class CM31:
    """Element a + b*i of the complex extension."""
    a: M31
    b: M31

    @classmethod
    def from_ints(cls, a: M31Like, b: M31Like) -> "CM31":
        return cls(to_m31(a), to_m31(b))

    @classmethod
    def zero(cls) -> "CM31":
        return cls(M31.zero(), M31.zero())

    @classmethod
    def one(cls) -> "CM31":
        return cls(M31.one(), M31.zero())

    def __add__(self, other: "CM31") -> "CM31":
        return CM31(self.a + other.a, self.b + other.b)

    def __sub__(self, other: "CM31") -> "CM31":
        return CM31(self.a - other.a, self.b - other.b)

    def __mul__(self, other: "CM31") -> "CM31":
        # (a + bi)(c + di) = (ac - bd) + (ad + bc)i
        return CM31(
            self.a * other.a - self.b * other.b,
            self.a * other.b + self.b * other.a,
        )

    def __neg__(self) -> "CM31":
        return CM31(-self.a, -self.b)

    def is_zero(self) -> bool:
        return self.a.is_zero() and self.b.is_zero()

    def inverse(self) -> "CM31":
        """(a - bi) / (a^2 + b^2); the norm is never zero for nonzero input."""
        if self.is_zero():
            raise ZeroDivisionError("CM31 zero has no inverse")
        norm_inv = (self.a * self.a + self.b * self.b).inverse()
        return CM31(self.a * norm_inv, -self.b * norm_inv)


# u^2 = 2 + i
_U_SQUARED = CM31(M31(2), M31(1))


@dataclass(frozen=True)
class QM31:
    """Element x + y*u of the degree-4 secure extension."""
    x: CM31
    y: CM31

    @classmethod
    def zero(cls) -> "QM31":
        return cls(CM31.zero(), CM31.zero())

    @classmethod
    def one(cls) -> "QM31":
        return cls(CM31.one(), CM31.zero())

    @classmethod
    def from_m31_array(cls, values: Sequence[M31Like]) -> "QM31":
        """
        Build from four M31 coordinates.

        Raises:
            ValueError: If values does not hold exactly four coordinates
        """
        if len(values) != 4:
            raise ValueError(f"QM31 needs 4 coordinates, got {len(values)}")
        a, b, c, d = (to_m31(v) for v in values)
        return cls(CM31(a, b), CM31(c, d))

    @classmethod
    def random(cls, rng: random.Random) -> "QM31":
        return cls.from_m31_array([M31.random(rng) for _ in range(4)])

    def to_m31_array(self) -> tuple[M31, M31, M31, M31]:
        return (self.x.a, self.x.b, self.y.a, self.y.b)

    def __add__(self, other: "QM31") -> "QM31":
        return QM31(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "QM31") -> "QM31":
        return QM31(self.x - other.x, self.y - other.y)

    def __mul__(self, other: "QM31") -> "QM31":
        # (x1 + y1 u)(x2 + y2 u) = x1 x2 + y1 y2 u^2 + (x1 y2 + y1 x2) u
        return QM31(
            self.x * other.x + _U_SQUARED * (self.y * other.y),
            self.x * other.y + self.y * other.x,
        )

    def __neg__(self) -> "QM31":
        return QM31(-self.x, -self.y)

    def is_zero(self) -> bool:
        return self.x.is_zero() and self.y.is_zero()

    def inverse(self) -> "QM31":
        """(x - y u) / (x^2 - (2 + i) y^2)."""
        if self.is_zero():
            raise ZeroDivisionError("QM31 zero has no inverse")
        denom = self.x * self.x - _U_SQUARED * (self.y * self.y)
        denom_inv = denom.inverse()
        return QM31(self.x * denom_inv, -self.y * denom_inv)


__all__ = [
    "CM31",
    "QM31",
]
