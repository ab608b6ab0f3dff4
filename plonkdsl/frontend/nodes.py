"""
Typed parse nodes.

The compiler never looks at raw text: it consumes the nodes defined here.
Coefficients stay as the literal text so numeric conversion (and its
failure) happens in the compiler, next to the other equation checks.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class VariableNode:
    name: str


@dataclass(frozen=True)
class CoefficientNode:
    text: str


@dataclass(frozen=True)
class TermNode:
    """
    A signed term on the left-hand side of an equation.

    One variable makes a linear term (`3x`), two make a quadratic term
    (`3x*y`).
    """
    negative: bool
    coefficient: Optional[CoefficientNode]
    variables: Tuple[VariableNode, ...]

    @property
    def is_quadratic(self) -> bool:
        return len(self.variables) == 2


@dataclass(frozen=True)
class PublicNode:
    """The public-input reference on the right-hand side."""
    negative: bool
    variable: VariableNode


@dataclass(frozen=True)
class EquationNode:
    terms: Tuple[TermNode, ...]
    public: Optional[PublicNode] = None
    line: Optional[int] = None
