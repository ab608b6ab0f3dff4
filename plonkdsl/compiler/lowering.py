"""
Gate Lowering Engine.

Maps every expression onto exactly one gate

    q_m·a·b + q_l·a + q_r·b + q_o·o + q_c + PI = 0

by a deterministic assignment of variables to the wires {A, B, O}. There is
nothing to search: a validated expression has at most three wire variables.

Sign convention:
    An equation  Σ ±c·term = ±p  is lowered as  Σ ±c·term ∓ p = 0.

    - every selector gets +c for an added term and -c for a subtracted one,
      with or without a quadratic term in the same equation
    - the public slot gets -value for `= p` and +value for `= -p`

    Worked example (a=1, b=1, c=2):
        a*b + a = c      ->  q_m=1,  q_l=1,  PI=-2   ->  1 + 1 - 2 = 0
        -a*b - a = -c    ->  q_m=-1, q_l=-1, PI=+2   -> -1 - 1 + 2 = 0

Wire assignment:
    - quadratic term: left operand on A, right operand on B, q_m
    - with a quadratic term, a linear term on the A (or B) variable is folded
      into q_l (or q_r); any other linear variable goes on O with q_o
    - without one, linear terms take A, B, O in source order

Inconsistencies found here (a variable missing from the table, a public
input stored as a witness, a wire bound twice) mean the validated
expressions and the table have diverged; they raise CircuitInvariantError.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

import numpy as np

from ..backend.composer import Constraint, ConstraintSystem, Gate, Witness
from ..common.field import FieldElement, PrimeField
from ..errors import CircuitInvariantError
from .expression import Expression, PublicTerm
from .variables import Role, VariableTable

if TYPE_CHECKING:
    from .circuit import Circuit

logger = logging.getLogger(__name__)


class WireRole(Enum):
    """The three wires of a gate."""
    A = "a"
    B = "b"
    O = "o"


# wire -> (selector setter, wire setter) on Constraint
_WIRE_SETTERS = {
    WireRole.A: ("left", "a"),
    WireRole.B: ("right", "b"),
    WireRole.O: ("output", "o"),
}

_LINEAR_ORDER = (WireRole.A, WireRole.B, WireRole.O)


@dataclass(frozen=True)
class SelectorTerm:
    """A signed coefficient feeding the selector of one wire."""
    wire: WireRole
    coefficient: int
    negative: bool


@dataclass
class GatePlan:
    """
    Wire assignment for one expression, before any value is looked up.

    Attributes:
        multiplier: (coefficient, negative) of the quadratic term, if any
        bindings: Variable bound to each used wire
        selectors: Linear selector contributions, in source order
        public: Public term, if any
    """
    multiplier: Optional[Tuple[int, bool]] = None
    bindings: Dict[WireRole, str] = field(default_factory=dict)
    selectors: List[SelectorTerm] = field(default_factory=list)
    public: Optional[PublicTerm] = None

    def bind(self, wire: WireRole, name: str) -> None:
        bound = self.bindings.get(wire)
        if bound is not None and bound != name:
            raise CircuitInvariantError(
                f"wire {wire.name} already bound to {bound!r}, cannot bind {name!r}"
            )
        self.bindings[wire] = name


def plan_gate(expr: Expression) -> GatePlan:
    """Assign the variables of one expression to wires and selectors."""
    plan = GatePlan(public=expr.public)

    if expr.quadratic is not None:
        quad = expr.quadratic
        plan.multiplier = (quad.coefficient, quad.negative)
        plan.bind(WireRole.A, quad.left)
        plan.bind(WireRole.B, quad.right)
        for term in expr.linear:
            if term.variable == quad.left:
                wire = WireRole.A
            elif term.variable == quad.right:
                wire = WireRole.B
            else:
                wire = WireRole.O
                plan.bind(wire, term.variable)
            plan.selectors.append(SelectorTerm(wire, term.coefficient, term.negative))
    else:
        if len(expr.linear) > len(_LINEAR_ORDER):
            raise CircuitInvariantError(
                f"{len(expr.linear)} linear terms do not fit on {len(_LINEAR_ORDER)} wires"
            )
        for wire, term in zip(_LINEAR_ORDER, expr.linear):
            plan.bind(wire, term.variable)
            plan.selectors.append(SelectorTerm(wire, term.coefficient, term.negative))

    return plan


def signed(field: PrimeField, value, negative: bool) -> FieldElement:
    element = field.element(value)
    return -element if negative else element


def build_constraint(plan: GatePlan, table: VariableTable,
                     witnesses: Mapping[str, Witness], field: PrimeField) -> Constraint:
    """
    Turn a plan into a gate using the table's current values.

    Args:
        plan: Output of `plan_gate`
        table: Variable table holding public input values
        witnesses: Composer witness for every WITNESS variable
        field: Field of the selectors
    """
    constraint = Constraint(field)

    if plan.public is not None:
        variable = table.get(plan.public.variable)
        if variable is None:
            raise CircuitInvariantError(f"public input {plan.public.variable!r} not in table")
        if variable.role is not Role.PUBLIC_INPUT:
            raise CircuitInvariantError(f"{plan.public.variable!r} is not a public input")
        # moving `= p` to the left-hand side flips its sign
        constraint.public(signed(field, variable.value, not plan.public.negative))

    if plan.multiplier is not None:
        coefficient, negative = plan.multiplier
        constraint.mult(signed(field, coefficient, negative))

    for term in plan.selectors:
        selector, _ = _WIRE_SETTERS[term.wire]
        getattr(constraint, selector)(signed(field, term.coefficient, term.negative))

    for wire, name in plan.bindings.items():
        witness = witnesses.get(name)
        if witness is None:
            raise CircuitInvariantError(f"wire variable {name!r} has no witness")
        _, wire_setter = _WIRE_SETTERS[wire]
        getattr(constraint, wire_setter)(witness)

    return constraint


def padded_gate_count(num_expressions: int) -> int:
    """Gate capacity a backend sizes its setup for: 2^(n + 1)."""
    return 1 << (num_expressions + 1)


@dataclass
class LoweredCircuit:
    """
    Everything a proving backend needs from a circuit.

    Attributes:
        gates: One gate per expression, in expression order
        public_inputs: Public input values, ordered by variable name
        padded_gates: Gate capacity for the backend's setup
        system: The constraint system the gates were recorded in
    """
    gates: List[Gate]
    public_inputs: List[FieldElement]
    padded_gates: int
    system: ConstraintSystem

    def is_satisfied(self) -> bool:
        return self.system.is_satisfied()

    def selector_table(self, padded: bool = True) -> np.ndarray:
        """Selector rows (see ConstraintSystem.selector_table), zero-padded to `padded_gates`."""
        return self.system.selector_table(self.padded_gates if padded else None)

    def wire_table(self, padded: bool = True) -> np.ndarray:
        """Witness indices on wires A, B and O, zero-padded to `padded_gates`."""
        return self.system.wire_table(self.padded_gates if padded else None)

    def selector_bytes(self) -> bytes:
        return b"".join(gate.to_bytes() for gate in self.gates)


def lower(circuit: Circuit) -> LoweredCircuit:
    """
    Lower a circuit into a fresh ConstraintSystem.

    Returns:
        LoweredCircuit with the gate list, ordered public inputs and the
        padded gate count
    """
    system = ConstraintSystem(circuit.field)
    circuit.gadget(system)
    if len(system.gates) != len(circuit.expressions):
        raise CircuitInvariantError(
            f"{len(circuit.expressions)} expressions produced {len(system.gates)} gates"
        )
    logger.info(
        "lowered %d expression(s) into %d gate(s), padded to %d",
        len(circuit.expressions), len(system.gates), circuit.padded_gates(),
    )
    return LoweredCircuit(
        gates=list(system.gates),
        public_inputs=circuit.public_inputs(),
        padded_gates=circuit.padded_gates(),
        system=system,
    )
