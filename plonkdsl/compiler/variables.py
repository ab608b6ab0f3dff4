"""
Variable Table.

Maps every variable name of a circuit to its role and current value.

    - WITNESS:       private, known only to the prover, bound to a wire
    - PUBLIC_INPUT:  known to prover and verifier, folded into a gate's
                     public slot instead of occupying a wire

Roles are decided once, when the table is derived from the expressions,
and a `Variable` is immutable: supplying a value replaces the entry with a
new `Variable` carrying the same role. Iteration is ordered by name, which
fixes both the witness order and the public-input vector order.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

from ..common.field import BLS12_381_SCALAR, FieldElement, PrimeField
from ..errors import NoSuchValueError
from .expression import Expression

logger = logging.getLogger(__name__)

Value = Union[int, FieldElement]


class Role(Enum):
    """Role of a variable in the circuit."""
    WITNESS = "witness"
    PUBLIC_INPUT = "public_input"


@dataclass(frozen=True)
class Variable:
    name: str
    role: Role
    value: FieldElement

    @property
    def is_public(self) -> bool:
        return self.role is Role.PUBLIC_INPUT


class VariableTable:
    """
    Name-ordered table of circuit variables.

    Build one with `VariableTable.derive(expressions)`; afterwards only
    values change, through `set_values`.

    Example:
        >>> table = VariableTable.derive(expressions)
        >>> table.set_values([("a", 1), ("c", 2)])
        >>> [name for name, _ in table.public_inputs()]
        ['c']
    """

    def __init__(self, variables: Iterable[Variable], field: PrimeField = BLS12_381_SCALAR):
        self.field = field
        self._variables: Dict[str, Variable] = {
            var.name: var for var in sorted(variables, key=lambda v: v.name)
        }

    @classmethod
    def derive(cls, expressions: Sequence[Expression],
               field: PrimeField = BLS12_381_SCALAR) -> VariableTable:
        """
        Classify every variable referenced by the expressions.

        Public-input references become PUBLIC_INPUT, quadratic and linear
        variables become WITNESS; the first classification of a name is
        kept. Every value starts at zero.
        """
        roles: Dict[str, Role] = {}
        for expr in expressions:
            if expr.public is not None:
                roles.setdefault(expr.public.variable, Role.PUBLIC_INPUT)
            for name in expr.wire_variable_names():
                roles.setdefault(name, Role.WITNESS)

        table = cls((Variable(name, role, field.zero()) for name, role in roles.items()), field)
        logger.debug(
            "derived %d variable(s): %d witness, %d public input",
            len(table), len(table.witnesses()), len(table.public_inputs()),
        )
        return table

    def set_values(self, updates: Union[Mapping[str, Value], Iterable[Tuple[str, Value]]]) -> None:
        """
        Store new values without touching roles.

        Every name is checked before anything is written, so a failed call
        leaves the table as it was. Variables not mentioned keep their
        current value.

        Args:
            updates: (name, value) pairs or a name -> value mapping; values
                     are integers (negative ones wrap around) or field elements

        Raises:
            NoSuchValueError: A name is not in the table
        """
        items = list(updates.items()) if isinstance(updates, Mapping) else list(updates)
        converted = []
        for name, value in items:
            if name not in self._variables:
                raise NoSuchValueError(name)
            converted.append((name, self.field.element(value)))

        for name, value in converted:
            self._variables[name] = replace(self._variables[name], value=value)
        logger.debug("set %d value(s)", len(converted))

    def lookup(self, name: str) -> Variable:
        """Return the variable called `name` (KeyError if absent)."""
        return self._variables[name]

    def get(self, name: str, default=None):
        return self._variables.get(name, default)

    def public_inputs(self) -> List[Tuple[str, FieldElement]]:
        """Public inputs as (name, value) pairs, sorted by name."""
        return [(var.name, var.value) for var in self if var.is_public]

    def witnesses(self) -> List[Tuple[str, FieldElement]]:
        """Witnesses as (name, value) pairs, sorted by name."""
        return [(var.name, var.value) for var in self if not var.is_public]

    def roles(self) -> Dict[str, Role]:
        return {var.name: var.role for var in self}

    def values(self) -> Dict[str, FieldElement]:
        return {var.name: var.value for var in self}

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self) -> Iterator[Variable]:
        # insertion order is name order; set_values replaces in place
        return iter(list(self._variables.values()))

    def __repr__(self) -> str:
        return f"VariableTable({len(self)} variables, {self.field!r})"
