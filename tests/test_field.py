import pytest

from plonkdsl.common.field import BLS12_381_SCALAR, FieldElement, PrimeField


def test_arithmetic_reduces_mod_p(small_field):
    a = small_field.element(45)
    b = small_field.element(67)
    assert (a + b).value == 15
    assert (a - b).value == 75
    assert (a * b).value == 3015 % 97
    assert (-a).value == 52


def test_negative_integers_wrap(small_field):
    assert small_field.element(-1).value == 96
    assert small_field.element(-1) == -small_field.one()
    assert small_field.element(-1) == 96
    assert small_field.element(-1) == -1


def test_to_signed(small_field):
    assert small_field.element(-3).to_signed() == -3
    assert small_field.element(3).to_signed() == 3
    assert small_field.element(48).to_signed() == 48
    assert small_field.element(49).to_signed() == -48


def test_bls12_381_encoding_is_32_bytes_little_endian():
    one = BLS12_381_SCALAR.one()
    assert one.to_bytes() == b"\x01" + b"\x00" * 31
    minus_one = -one
    assert minus_one.value == BLS12_381_SCALAR.prime - 1
    assert len(minus_one.to_bytes()) == 32
    assert int.from_bytes(minus_one.to_bytes(), "little") == BLS12_381_SCALAR.prime - 1


def test_element_rejects_non_integers(small_field):
    with pytest.raises(TypeError):
        small_field.element("3")
    with pytest.raises(TypeError):
        small_field.element(True)


def test_fields_do_not_mix(small_field):
    other = PrimeField(101)
    with pytest.raises(ValueError):
        small_field.element(1) + other.element(1)
    with pytest.raises(ValueError):
        small_field.element(other.element(1))


def test_field_equality_and_hash():
    assert PrimeField(97) == PrimeField(97)
    assert hash(PrimeField(97)) == hash(PrimeField(97))
    assert FieldElement(5, PrimeField(97)) == FieldElement(102, PrimeField(97))


def test_prime_must_be_at_least_two():
    with pytest.raises(ValueError):
        PrimeField(1)
