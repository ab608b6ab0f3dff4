"""
Expression Model.

An Expression is the normalized form of one equation:

    [± c·l·r] [± c·x] [± c·y] [± c·z] = [± p]

    - at most one quadratic term ("tri-term": coefficient, two variables)
    - zero to three linear terms ("bi-terms": coefficient, one variable)
    - at most one public-input reference on the right-hand side

Expressions are immutable once built. The only check made while building
one is the quadratic-term count; the other structural rules are whole
program passes in `validation`.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import U64_MAX
from ..errors import CoefficientError, TooManyQuadraticTermsError
from ..frontend.nodes import CoefficientNode, EquationNode


_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class QuadraticTerm:
    """
    A term of the form `± coefficient · left · right`.

    Attributes:
        negative: True when the term is subtracted
        coefficient: Unsigned coefficient (1 when omitted in the source)
        left: Variable bound to wire A
        right: Variable bound to wire B
    """
    negative: bool
    coefficient: int
    left: str
    right: str

    def __str__(self) -> str:
        coeff = "" if self.coefficient == 1 else str(self.coefficient)
        return f"{'-' if self.negative else '+'}{coeff}{self.left}*{self.right}"


@dataclass(frozen=True)
class LinearTerm:
    """A term of the form `± coefficient · variable`."""
    negative: bool
    coefficient: int
    variable: str

    def __str__(self) -> str:
        coeff = "" if self.coefficient == 1 else str(self.coefficient)
        return f"{'-' if self.negative else '+'}{coeff}{self.variable}"


@dataclass(frozen=True)
class PublicTerm:
    """The right-hand side reference to a public input."""
    negative: bool
    variable: str

    def __str__(self) -> str:
        return f"{'-' if self.negative else ''}{self.variable}"


@dataclass(frozen=True)
class Expression:
    """
    One equation of a circuit.

    Attributes:
        quadratic: The quadratic term, if any
        linear: Linear terms in source order
        public: The public-input term, if any
        line: Source line (None for hand-built expressions)

    Example:
        >>> expr = Expression(
        ...     quadratic=QuadraticTerm(False, 1, "a", "b"),
        ...     linear=(LinearTerm(False, 1, "a"),),
        ...     public=PublicTerm(False, "c"),
        ... )
        >>> str(expr)
        'a*b + a = c'
    """
    quadratic: Optional[QuadraticTerm] = None
    linear: Tuple[LinearTerm, ...] = field(default_factory=tuple)
    public: Optional[PublicTerm] = None
    line: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        # accept any sequence, store a tuple
        object.__setattr__(self, "linear", tuple(self.linear))

    def wire_variable_names(self) -> List[str]:
        """Variables that occupy a wire, in binding order (duplicates kept)."""
        names = []
        if self.quadratic is not None:
            names.extend([self.quadratic.left, self.quadratic.right])
        names.extend(term.variable for term in self.linear)
        return names

    def variable_names(self) -> List[str]:
        """Every variable name referenced, public input first."""
        names = [self.public.variable] if self.public is not None else []
        return names + self.wire_variable_names()

    def __str__(self) -> str:
        terms = []
        if self.quadratic is not None:
            terms.append(str(self.quadratic))
        terms.extend(str(term) for term in self.linear)
        lhs = " ".join(t[0] + " " + t[1:] for t in terms)
        # leading "+ " is implied
        if lhs.startswith("+ "):
            lhs = lhs[2:]
        elif lhs.startswith("- "):
            lhs = "-" + lhs[2:]
        rhs = str(self.public) if self.public is not None else "0"
        return f"{lhs} = {rhs}"

    @classmethod
    def from_node(cls, node: EquationNode, equation_index: int = 0,
                  max_coefficient: int = U64_MAX) -> Expression:
        """
        Build an Expression from a parsed equation.

        Args:
            node: Parsed equation
            equation_index: Position of the equation, used in error reports
            max_coefficient: Largest accepted coefficient literal

        Raises:
            CoefficientError: A coefficient is not an unsigned integer in range
            TooManyQuadraticTermsError: The equation has two quadratic terms
        """
        quadratics = []
        linear = []
        for term in node.terms:
            coefficient = parse_coefficient(term.coefficient, max_coefficient, node.line)
            if term.is_quadratic:
                left, right = (var.name for var in term.variables)
                quadratics.append(QuadraticTerm(term.negative, coefficient, left, right))
            elif len(term.variables) == 1:
                linear.append(LinearTerm(term.negative, coefficient, term.variables[0].name))
            else:
                raise ValueError(f"term must reference one or two variables, got {term!r}")

        if len(quadratics) > 1:
            raise TooManyQuadraticTermsError(
                equation_index, node.line, f"found {len(quadratics)}"
            )

        public = None
        if node.public is not None:
            public = PublicTerm(node.public.negative, node.public.variable.name)

        return cls(
            quadratic=quadratics[0] if quadratics else None,
            linear=tuple(linear),
            public=public,
            line=node.line,
        )


def parse_coefficient(node: Optional[CoefficientNode], max_coefficient: int = U64_MAX,
                      line: Optional[int] = None) -> int:
    """Convert a coefficient literal; a missing coefficient is 1."""
    if node is None:
        return 1
    text = node.text
    if not _DIGITS.fullmatch(text):
        raise CoefficientError(text, line)
    value = int(text)
    if value > max_coefficient:
        raise CoefficientError(text, line)
    return value
