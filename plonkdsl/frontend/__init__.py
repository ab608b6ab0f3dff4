"""
Front end of the compiler: grammar, parser and typed parse nodes.

Usage:
    >>> from plonkdsl.frontend import parse_program
    >>> [eq.line for eq in parse_program("a + b = c\\na*b = d")]
    [1, 2]
"""

from .nodes import (
    CoefficientNode,
    EquationNode,
    PublicNode,
    TermNode,
    VariableNode,
)
from .parser import parse_program, parse_file

__all__ = [
    "CoefficientNode",
    "EquationNode",
    "PublicNode",
    "TermNode",
    "VariableNode",
    "parse_program",
    "parse_file",
]
