"""
Backend interface: gate builder, composer and a reference constraint system.
"""

from .composer import (
    Composer,
    Constraint,
    ConstraintSystem,
    Gate,
    SELECTOR_NAMES,
    Witness,
)

__all__ = [
    "Composer",
    "Constraint",
    "ConstraintSystem",
    "Gate",
    "SELECTOR_NAMES",
    "Witness",
]
