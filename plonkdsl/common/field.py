"""
Prime-field values for circuits.

Selectors, witness values and public inputs all live in one prime field.
Gates go to a Plonk backend over the BLS12-381 scalar field, which is
therefore the default; a small prime such as 97 keeps hand-written checks
readable.

Key Concepts:
    - Every value is reduced modulo p on construction
    - A negative coefficient becomes p - c in its selector
    - User-supplied signed integers wrap the same way: -1 is stored as p - 1
    - Encoding is little-endian over the field's byte width (32 for BLS12-381)

Example:
    >>> field = PrimeField(97)
    >>> c = field.element(-2)
    >>> c.value, c.to_signed()
    (95, -2)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union


@dataclass
class FieldElement:
    """
    A reduced residue modulo the prime of its field.

    Attributes:
        value: Canonical representative in [0, p-1]
        field: The PrimeField this value belongs to

    Elements of different fields never combine; comparing against a plain
    int compares residues, so `field.element(-1) == -1` holds.
    """
    value: int
    field: 'PrimeField'

    def __post_init__(self):
        self.value = self.value % self.field.prime

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, mod {self.field.prime})"

    def __str__(self) -> str:
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.value == other.value and self.field.prime == other.field.prime
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == (other % self.field.prime)
        return False

    def __hash__(self) -> int:
        return hash((self.value, self.field.prime))

    def _coerce(self, other: Union[FieldElement, int]) -> int:
        if isinstance(other, FieldElement):
            if other.field.prime != self.field.prime:
                raise ValueError(
                    f"Cannot mix elements of Z_{self.field.prime} and Z_{other.field.prime}"
                )
            return other.value
        return other

    def __add__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value + self._coerce(other), self.field)

    def __radd__(self, other: int) -> FieldElement:
        return self + other

    def __sub__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value - self._coerce(other), self.field)

    def __rsub__(self, other: int) -> FieldElement:
        return FieldElement(other - self.value, self.field)

    def __mul__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value * self._coerce(other), self.field)

    def __rmul__(self, other: int) -> FieldElement:
        return self * other

    def __neg__(self) -> FieldElement:
        return FieldElement(-self.value, self.field)

    def is_zero(self) -> bool:
        return self.value == 0

    def to_signed(self) -> int:
        """
        Return the representative closest to zero.

        Values above p/2 are reported as negative integers, so a selector
        holding p - 3 reads back as -3.
        """
        if self.value > self.field.prime // 2:
            return self.value - self.field.prime
        return self.value

    def to_bytes(self) -> bytes:
        """Little-endian encoding, padded to the field's byte width."""
        return self.value.to_bytes(self.field.byte_length, "little")


class PrimeField:
    """
    The field Z_p that a circuit's selectors and values are drawn from.

    Attributes:
        prime: The modulus p (primality is assumed, not checked)
        byte_length: Width of an encoded element
    """

    BLS12_381_SCALAR_PRIME = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001

    def __init__(self, prime: int):
        if prime < 2:
            raise ValueError("Prime must be at least 2")
        self.prime = prime
        self.byte_length = max(1, (prime.bit_length() + 7) // 8)

    def __repr__(self) -> str:
        return f"PrimeField({self.prime})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PrimeField) and other.prime == self.prime

    def __hash__(self) -> int:
        return hash(self.prime)

    def element(self, value: Union[FieldElement, int]) -> FieldElement:
        """
        Bring a user value into the field.

        Args:
            value: A signed integer (wrapped modulo p) or an element of this field

        Raises:
            TypeError: value is neither an int nor a FieldElement (bool included)
            ValueError: value is an element of another field
        """
        if isinstance(value, FieldElement):
            if value.field.prime != self.prime:
                raise ValueError(f"{value!r} does not belong to {self!r}")
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected an integer or field element, got {type(value).__name__}")
        return FieldElement(value, self)

    def zero(self) -> FieldElement:
        return FieldElement(0, self)

    def one(self) -> FieldElement:
        return FieldElement(1, self)


BLS12_381_SCALAR = PrimeField(PrimeField.BLS12_381_SCALAR_PRIME)
