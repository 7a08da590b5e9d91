"""
twinmerkle - binary Merkle commitments over finite-field leaves with twin
membership proofs for adjacent leaf pairs.

Subpackages:
    fields   M31 base field and its CM31/QM31 extensions
    crypto   Domain-separated leaf/node hashing
    merkle   Tree builder, twin proof query and verification, documents
    script   Proof linearization into push items
    config   Runtime configuration
    schemas  Errors, versioning and canonical JSON
"""

__version__ = "0.1.0"
