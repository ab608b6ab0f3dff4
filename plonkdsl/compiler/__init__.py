"""
Arithmetization compiler.

Key Components:
    - Expression: One normalized equation (quadratic, linear, public terms)
    - validate_expressions: Whole-program structural checks
    - VariableTable: Name -> (role, value), roles fixed at derivation
    - Circuit: Expressions + table, with the backend gadget interface
    - lower: One gate per expression, ordered public inputs, padded size

Usage:
    >>> from plonkdsl.compiler import Circuit, lower
    >>> circuit = Circuit.parse("a*b + a = c")
    >>> circuit.set_values({"a": 1, "b": 1, "c": 2})
    >>> lower(circuit).is_satisfied()
    True
"""

from .expression import Expression, LinearTerm, PublicTerm, QuadraticTerm
from .validation import validate_expressions
from .variables import Role, Variable, VariableTable
from .lowering import GatePlan, LoweredCircuit, WireRole, lower, plan_gate
from .circuit import Circuit

__all__ = [
    "Expression",
    "LinearTerm",
    "PublicTerm",
    "QuadraticTerm",
    "validate_expressions",
    "Role",
    "Variable",
    "VariableTable",
    "GatePlan",
    "LoweredCircuit",
    "WireRole",
    "lower",
    "plan_gate",
    "Circuit",
]
