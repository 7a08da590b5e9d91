"""
Proof linearization for stack-machine verifiers.
"""
from .pushable import (
    PushKind,
    ScriptPush,
    ScriptBuilder,
    push_field_element,
    push_hash,
    push_twin_proof,
    linearize_twin_proof,
)

__all__ = [
    "PushKind",
    "ScriptPush",
    "ScriptBuilder",
    "push_field_element",
    "push_hash",
    "push_twin_proof",
    "linearize_twin_proof",
]
