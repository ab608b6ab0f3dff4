"""
Error taxonomy for the plonk-dsl compiler.

User-facing failures derive from PlonkDslError and are raised verbatim to
the caller; compilation is all-or-nothing, there is no partial result.

    PlonkDslError
    ├── ParseError                  malformed source text
    ├── CoefficientError            coefficient is not an unsigned 64-bit integer
    ├── NoSuchValueError            value supplied for an unknown variable
    ├── ConfigError                 malformed configuration file
    └── ValidationError             an equation breaks a structural rule
        ├── SameQuadraticVariablesError
        ├── TooManyQuadraticTermsError
        ├── TooManyVariablesError
        ├── RepeatedLinearVariableError
        ├── PublicVariableCollisionError
        └── RoleConflictError

CircuitInvariantError is NOT part of that hierarchy: it signals that the
expression list and the variable table have diverged, which is a defect in
the compiler rather than a problem with the input.
"""

from __future__ import annotations
from typing import Optional


class PlonkDslError(Exception):
    """Base class for every user-facing compiler error."""


class ParseError(PlonkDslError, ValueError):
    """
    Source text does not match the grammar.

    Attributes:
        line: 1-based line of the offending token (if known)
        column: 1-based column of the offending token (if known)
        context: A snippet of the source around the failure
    """

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None, context: str = ""):
        self.line = line
        self.column = column
        self.context = context
        location = f" at line {line}, column {column}" if line is not None else ""
        super().__init__(f"{message}{location}")


class CoefficientError(PlonkDslError, ValueError):
    """A coefficient token does not parse as an unsigned integer in range."""

    def __init__(self, text: str, line: Optional[int] = None):
        self.text = text
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"invalid coefficient {text!r}{where}")


class NoSuchValueError(PlonkDslError, KeyError):
    """A value was supplied for a variable the circuit does not reference."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"no such value: {self.name!r}"


class ConfigError(PlonkDslError):
    """Configuration file is missing or holds unknown/invalid settings."""


class ValidationError(PlonkDslError, ValueError):
    """
    An equation violates one of the structural rules.

    Attributes:
        equation_index: Zero-based position of the equation in the program
        line: Source line of the equation (None for hand-built expressions)
    """

    rule = "invalid equation"

    def __init__(self, equation_index: int, line: Optional[int] = None,
                 detail: str = ""):
        self.equation_index = equation_index
        self.line = line
        self.detail = detail
        where = f"equation {equation_index}"
        if line is not None:
            where += f" (line {line})"
        message = f"{where}: {self.rule}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class SameQuadraticVariablesError(ValidationError):
    rule = "quadratic term multiplies a variable by itself"


class TooManyQuadraticTermsError(ValidationError):
    rule = "more than one quadratic term"


class TooManyVariablesError(ValidationError):
    rule = "too many distinct variables for one gate"


class RepeatedLinearVariableError(ValidationError):
    rule = "variable repeated across linear terms"


class PublicVariableCollisionError(ValidationError):
    rule = "public input also used as a wire variable"


class RoleConflictError(ValidationError):
    """
    A name is a public input in one equation and a wire variable in another.

    Goes beyond the per-equation rules above: without it the first
    classification would win and lowering would later find a public input
    stored as a witness (or the reverse). Reported at the later equation.
    """

    rule = "variable used both as public input and as wire variable"


class CircuitInvariantError(RuntimeError):
    """Internal consistency fault raised while lowering a validated circuit."""
