"""
Gate builder and composer interface.

A proving backend consumes a circuit through three things: one gadget
call that appends witnesses and gates to a composer, the ordered public
input vector, and the padded gate count. This module defines the
composer side of that contract.

Gate equation (one per appended constraint):

    q_m·a·b + q_l·a + q_r·b + q_o·o + q_c + PI = 0

    - a, b, o: witness values bound to wires A, B and O
    - q_*:     selectors
    - PI:      public input folded into the gate

`ConstraintSystem` is an in-memory composer: it records every gate,
evaluates it against the witness values and exports selector/wire tables
sized for a backend's setup. It does not produce proofs.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..common.field import BLS12_381_SCALAR, FieldElement, PrimeField

logger = logging.getLogger(__name__)

SELECTOR_NAMES = ("q_m", "q_l", "q_r", "q_o", "q_c", "pi")


@dataclass(frozen=True)
class Witness:
    """Handle to a value appended to a composer."""
    index: int


class Constraint:
    """
    Builder for a single gate.

    Every setter returns the constraint so calls chain. Wires left unbound
    are attached to the composer's zero witness when the gate is appended.

    Example:
        >>> gate = Constraint(field).mult(1).public(-d).a(a).b(b)
    """

    def __init__(self, field: PrimeField = BLS12_381_SCALAR):
        self.field = field
        self.q_m = field.zero()
        self.q_l = field.zero()
        self.q_r = field.zero()
        self.q_o = field.zero()
        self.q_c = field.zero()
        self.pi = field.zero()
        self.w_a: Optional[Witness] = None
        self.w_b: Optional[Witness] = None
        self.w_o: Optional[Witness] = None

    # Selectors

    def mult(self, value) -> Constraint:
        self.q_m = self.field.element(value)
        return self

    def left(self, value) -> Constraint:
        self.q_l = self.field.element(value)
        return self

    def right(self, value) -> Constraint:
        self.q_r = self.field.element(value)
        return self

    def output(self, value) -> Constraint:
        self.q_o = self.field.element(value)
        return self

    def constant(self, value) -> Constraint:
        self.q_c = self.field.element(value)
        return self

    def public(self, value) -> Constraint:
        self.pi = self.field.element(value)
        return self

    # Wires

    def a(self, witness: Witness) -> Constraint:
        self.w_a = witness
        return self

    def b(self, witness: Witness) -> Constraint:
        self.w_b = witness
        return self

    def o(self, witness: Witness) -> Constraint:
        self.w_o = witness
        return self

    def __repr__(self) -> str:
        selectors = ", ".join(
            f"{name}={value.to_signed()}" for name, value in zip(SELECTOR_NAMES, self.selectors())
        )
        return f"Constraint({selectors})"

    def selectors(self) -> Tuple[FieldElement, ...]:
        return (self.q_m, self.q_l, self.q_r, self.q_o, self.q_c, self.pi)


@dataclass(frozen=True)
class Gate:
    """
    A gate as recorded by a composer.

    Attributes:
        q_m, q_l, q_r, q_o, q_c: Selectors
        pi: Public input value folded into the gate
        a, b, o: Bound witnesses (the zero witness when unused)
    """
    q_m: FieldElement
    q_l: FieldElement
    q_r: FieldElement
    q_o: FieldElement
    q_c: FieldElement
    pi: FieldElement
    a: Witness
    b: Witness
    o: Witness

    def selectors(self) -> Tuple[FieldElement, ...]:
        return (self.q_m, self.q_l, self.q_r, self.q_o, self.q_c, self.pi)

    def wires(self) -> Tuple[Witness, Witness, Witness]:
        return (self.a, self.b, self.o)

    def evaluate(self, a: FieldElement, b: FieldElement, o: FieldElement) -> FieldElement:
        """Left-hand side of the gate equation for the given wire values."""
        return (self.q_m * a * b + self.q_l * a + self.q_r * b
                + self.q_o * o + self.q_c + self.pi)

    def to_bytes(self) -> bytes:
        """Concatenated canonical encoding of the six selector values."""
        return b"".join(value.to_bytes() for value in self.selectors())


class Composer(ABC):
    """
    What a proving backend hands to a circuit's gadget.

    Subclasses decide what happens to the appended witnesses and gates
    (build polynomials, record them, ...) and must implement all three
    members below before they can be instantiated.
    """

    def __init__(self, field: PrimeField = BLS12_381_SCALAR):
        self.field = field

    @property
    @abstractmethod
    def zero(self) -> Witness:
        """Witness holding the constant zero, bound to every unused wire."""

    @abstractmethod
    def append_witness(self, value) -> Witness:
        """Append a value and return its handle."""

    @abstractmethod
    def append_gate(self, constraint: Constraint) -> None:
        """Record one gate; unbound wires take the zero witness."""


class ConstraintSystem(Composer):
    """
    In-memory composer that records and checks gates.

    Witness 0 is reserved for the constant zero, like the zero witness of
    a Plonk composer.

    Example:
        >>> cs = ConstraintSystem()
        >>> x = cs.append_witness(3)
        >>> cs.append_gate(Constraint().left(1).public(-3).a(x))
        >>> cs.is_satisfied()
        True
    """

    def __init__(self, field: PrimeField = BLS12_381_SCALAR):
        super().__init__(field)
        self._witnesses: List[FieldElement] = [field.zero()]
        self.gates: List[Gate] = []

    @property
    def zero(self) -> Witness:
        return Witness(0)

    def append_witness(self, value) -> Witness:
        self._witnesses.append(self.field.element(value))
        return Witness(len(self._witnesses) - 1)

    def append_gate(self, constraint: Constraint) -> None:
        if constraint.field != self.field:
            raise ValueError(f"constraint over {constraint.field!r}, composer over {self.field!r}")
        gate = Gate(
            *constraint.selectors(),
            a=self._check_witness(constraint.w_a),
            b=self._check_witness(constraint.w_b),
            o=self._check_witness(constraint.w_o),
        )
        self.gates.append(gate)
        logger.debug("gate %d: %r", len(self.gates) - 1, constraint)

    def _check_witness(self, witness: Optional[Witness]) -> Witness:
        if witness is None:
            return self.zero
        if not 0 <= witness.index < len(self._witnesses):
            raise ValueError(f"{witness!r} was not appended to this composer")
        return witness

    def witness_value(self, witness: Witness) -> FieldElement:
        return self._witnesses[witness.index]

    @property
    def num_witnesses(self) -> int:
        """Appended witnesses, not counting the reserved zero witness."""
        return len(self._witnesses) - 1

    def evaluate(self, gate: Gate) -> FieldElement:
        return gate.evaluate(*(self.witness_value(w) for w in gate.wires()))

    def unsatisfied_gates(self) -> List[int]:
        """Indices of gates whose equation does not evaluate to zero."""
        return [i for i, gate in enumerate(self.gates) if not self.evaluate(gate).is_zero()]

    def is_satisfied(self) -> bool:
        return not self.unsatisfied_gates()

    def selector_table(self, padded: Optional[int] = None) -> np.ndarray:
        """
        Selector values as a (rows, 6) array of Python integers.

        Columns follow SELECTOR_NAMES. When `padded` is given the table is
        extended with all-zero rows up to that many rows.
        """
        rows = self._rows(padded)
        table = np.zeros((rows, len(SELECTOR_NAMES)), dtype=object)
        for i, gate in enumerate(self.gates):
            table[i, :] = [value.value for value in gate.selectors()]
        return table

    def wire_table(self, padded: Optional[int] = None) -> np.ndarray:
        """Witness indices bound to wires A, B and O, one row per gate."""
        rows = self._rows(padded)
        table = np.zeros((rows, 3), dtype=np.int64)
        for i, gate in enumerate(self.gates):
            table[i, :] = [w.index for w in gate.wires()]
        return table

    def _rows(self, padded: Optional[int]) -> int:
        if padded is None:
            return len(self.gates)
        if padded < len(self.gates):
            raise ValueError(f"cannot pad {len(self.gates)} gates into {padded} rows")
        return padded
