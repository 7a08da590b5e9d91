"""
Finite-field element types committed by the Merkle tree.

M31 is the base field; CM31/QM31 are its extensions.
"""
from .m31 import (
    M31_MODULUS,
    M31_BYTE_SIZE,
    M31,
    M31Like,
    to_m31,
)
from .qm31 import CM31, QM31

__all__ = [
    "M31_MODULUS",
    "M31_BYTE_SIZE",
    "M31",
    "M31Like",
    "to_m31",
    "CM31",
    "QM31",
]
