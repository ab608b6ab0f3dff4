"""
Common utilities for the plonk-dsl compiler.

This module provides:
    - Finite field arithmetic (PrimeField, FieldElement)
    - The default BLS12-381 scalar field
"""

from .field import PrimeField, FieldElement, BLS12_381_SCALAR

__all__ = [
    "PrimeField",
    "FieldElement",
    "BLS12_381_SCALAR",
]
