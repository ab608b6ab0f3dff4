"""
Circuit: the compiled form of a program.

A Circuit owns the ordered expression list and the variable table derived
from it. The structure never changes after construction; only values do,
through `set_values`. The expression order is the gate order and is part
of the circuit's identity for a backend.

A Circuit is not safe for concurrent mutation: calls to `set_values` must
be serialized by the caller.

Example:
    >>> circuit = Circuit.parse("a + b = c\\na*b = d")
    >>> circuit.set_values([("a", 1), ("b", 1), ("c", 2), ("d", 1)])
    >>> lowered = lower(circuit)
    >>> lowered.is_satisfied()
    True
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..common.field import BLS12_381_SCALAR, FieldElement, PrimeField
from ..config import CompilerConfig
from ..errors import CircuitInvariantError
from ..frontend.nodes import EquationNode
from ..frontend.parser import parse_file, parse_program
from ..backend.composer import Composer
from .expression import Expression
from .lowering import build_constraint, padded_gate_count, plan_gate
from .validation import validate_expressions
from .variables import Value, VariableTable

logger = logging.getLogger(__name__)


class Circuit:
    """
    A validated list of expressions plus its variable table.

    Args:
        expressions: Expressions in gate order
        field: Field of every selector and value (BLS12-381 scalars by default)

    Raises:
        ValidationError: An expression breaks a structural rule
    """

    def __init__(self, expressions: Sequence[Expression],
                 field: PrimeField = BLS12_381_SCALAR):
        expressions = tuple(expressions)
        validate_expressions(expressions)
        self.field = field
        self._expressions = expressions
        self._variables = VariableTable.derive(expressions, field)
        logger.debug("circuit built: %d expression(s), %d variable(s)",
                     len(expressions), len(self._variables))

    @classmethod
    def from_nodes(cls, nodes: Iterable[EquationNode],
                   config: Optional[CompilerConfig] = None) -> Circuit:
        """
        Build a circuit from parsed equations.

        Each equation is converted in turn (coefficients, quadratic-term
        count); the whole-program checks run once all are converted.
        """
        config = config or CompilerConfig()
        expressions = [
            Expression.from_node(node, index, config.max_coefficient)
            for index, node in enumerate(nodes)
        ]
        return cls(expressions, config.field)

    @classmethod
    def parse(cls, text: str, config: Optional[CompilerConfig] = None) -> Circuit:
        """Parse source text into a circuit."""
        return cls.from_nodes(parse_program(text), config)

    @classmethod
    def from_file(cls, path: Union[str, Path],
                  config: Optional[CompilerConfig] = None) -> Circuit:
        logger.info("compiling %s", path)
        return cls.from_nodes(parse_file(path), config)

    @property
    def expressions(self) -> Tuple[Expression, ...]:
        return self._expressions

    @property
    def variables(self) -> VariableTable:
        return self._variables

    def __len__(self) -> int:
        return len(self._expressions)

    def __repr__(self) -> str:
        return f"Circuit({len(self)} expressions, {len(self._variables)} variables)"

    def set_values(self, updates: Iterable[Tuple[str, Value]]) -> None:
        """
        Supply witness and public input values (see VariableTable.set_values).

        Raises:
            NoSuchValueError: A name is not used by the circuit
        """
        self._variables.set_values(updates)

    # Backend interface

    def gadget(self, composer: Composer) -> None:
        """
        Append this circuit's witnesses and gates to a composer.

        Witnesses are appended in name order, then one gate per expression
        in expression order.
        """
        if composer.field != self.field:
            raise ValueError(f"composer over {composer.field!r}, circuit over {self.field!r}")
        witnesses = {
            name: composer.append_witness(value)
            for name, value in self._variables.witnesses()
        }
        for index, expr in enumerate(self._expressions):
            try:
                plan = plan_gate(expr)
                constraint = build_constraint(plan, self._variables, witnesses, self.field)
            except CircuitInvariantError as exc:
                raise CircuitInvariantError(f"expression {index} ({expr}): {exc}") from exc
            composer.append_gate(constraint)

    def public_inputs(self) -> List[FieldElement]:
        """Public input values, ordered by variable name."""
        return [value for _, value in self._variables.public_inputs()]

    def public_input_names(self) -> List[str]:
        return [name for name, _ in self._variables.public_inputs()]

    def padded_gates(self) -> int:
        return padded_gate_count(len(self._expressions))
