"""
Structural checks over a whole program.

One gate has three wires and one public slot, so an equation is only
accepted when it fits that shape. The checks run as separate passes over
every expression, in a fixed order; the first failing pass aborts with its
own error kind:

    1. quadratic operands are distinct            SameQuadraticVariablesError
    2. fewer than five distinct names, at most
       three of them on wires                     TooManyVariablesError
    3. linear variables are pairwise distinct     RepeatedLinearVariableError
    4. public input is not also a wire variable   PublicVariableCollisionError
    5. no name is public in one equation and a
       wire variable in another                   RoleConflictError

The quadratic-term count is not checked here: `Expression.from_node`
rejects a second quadratic term while the equation is being built.
"""

from __future__ import annotations
import logging
from typing import Dict, Sequence

from ..errors import (
    PublicVariableCollisionError,
    RepeatedLinearVariableError,
    RoleConflictError,
    SameQuadraticVariablesError,
    TooManyVariablesError,
)
from .expression import Expression

logger = logging.getLogger(__name__)

MAX_DISTINCT_VARIABLES = 4
WIRES_PER_GATE = 3


def check_distinct_quadratic_operands(expressions: Sequence[Expression]) -> None:
    """Check that `l != r` for every quadratic term `c·l·r`."""
    for index, expr in enumerate(expressions):
        if expr.quadratic is not None and expr.quadratic.left == expr.quadratic.right:
            raise SameQuadraticVariablesError(
                index, expr.line, f"{expr.quadratic.left!r} * {expr.quadratic.right!r}"
            )


def check_variable_count(expressions: Sequence[Expression]) -> None:
    """Check each expression names fewer than five variables, at most three on wires."""
    for index, expr in enumerate(expressions):
        names = set(expr.variable_names())
        if len(names) > MAX_DISTINCT_VARIABLES:
            raise TooManyVariablesError(
                index, expr.line, f"{len(names)} distinct variables"
            )
        wires = set(expr.wire_variable_names())
        if len(wires) > WIRES_PER_GATE:
            detail = (f"{len(wires)} wire variables ({', '.join(sorted(wires))}) "
                      f"for {WIRES_PER_GATE} wires")
            if expr.quadratic is not None:
                detail += "; beside a quadratic term only the output wire is free"
            raise TooManyVariablesError(index, expr.line, detail)


def check_no_repeated_linear_variables(expressions: Sequence[Expression]) -> None:
    for index, expr in enumerate(expressions):
        seen = set()
        for term in expr.linear:
            if term.variable in seen:
                raise RepeatedLinearVariableError(index, expr.line, repr(term.variable))
            seen.add(term.variable)


def check_public_distinct(expressions: Sequence[Expression]) -> None:
    """Check the public input differs from every wire variable of its equation."""
    for index, expr in enumerate(expressions):
        if expr.public is None:
            continue
        if expr.public.variable in expr.wire_variable_names():
            raise PublicVariableCollisionError(index, expr.line, repr(expr.public.variable))


def check_consistent_roles(expressions: Sequence[Expression]) -> None:
    """Check that no name is a public input in one place and a wire elsewhere."""
    public_at: Dict[str, int] = {}
    wire_at: Dict[str, int] = {}
    for index, expr in enumerate(expressions):
        if expr.public is not None:
            public_at.setdefault(expr.public.variable, index)
        for name in expr.wire_variable_names():
            wire_at.setdefault(name, index)

    conflicts = set(public_at) & set(wire_at)
    if not conflicts:
        return
    # report the equation where the second role first shows up
    name = min(conflicts, key=lambda n: (max(public_at[n], wire_at[n]), n))
    index = max(public_at[name], wire_at[name])
    other = min(public_at[name], wire_at[name])
    raise RoleConflictError(
        index, expressions[index].line, f"{name!r} (see equation {other})"
    )


CHECKS = (
    check_distinct_quadratic_operands,
    check_variable_count,
    check_no_repeated_linear_variables,
    check_public_distinct,
    check_consistent_roles,
)


def validate_expressions(expressions: Sequence[Expression]) -> None:
    """
    Run every structural check over the whole program.

    Raises:
        ValidationError: The first failing check's error
    """
    for check in CHECKS:
        check(expressions)
    logger.debug("validated %d expression(s)", len(expressions))
