import pytest

from plonkdsl import Circuit, CompilerConfig, lower
from plonkdsl.compiler.variables import Role
from plonkdsl.errors import CoefficientError, NoSuchValueError, ParseError


def test_parse_builds_expressions_and_table(two_gate_source):
    circuit = Circuit.parse(two_gate_source)
    assert len(circuit) == 2
    assert [str(e) for e in circuit.expressions] == ["a + b = c", "a*b = d"]
    assert circuit.variables.roles() == {
        "a": Role.WITNESS, "b": Role.WITNESS, "c": Role.PUBLIC_INPUT, "d": Role.PUBLIC_INPUT,
    }
    assert circuit.padded_gates() == 8


def test_public_inputs_are_sorted_by_name():
    circuit = Circuit.parse("x = z\ny = a")
    circuit.set_values({"z": 26, "a": 1})
    assert circuit.public_input_names() == ["a", "z"]
    assert circuit.public_inputs() == [1, 26]


def test_set_values_twice_keeps_latest_and_roles():
    circuit = Circuit.parse("a*b + a = c")
    circuit.set_values([("a", 1), ("b", 1), ("c", 2)])
    circuit.set_values([("a", 2), ("c", 5)])
    values = circuit.variables.values()
    assert values["a"] == 2
    assert values["b"] == 1
    assert values["c"] == 5
    assert circuit.variables.lookup("c").role is Role.PUBLIC_INPUT
    assert circuit.variables.lookup("a").role is Role.WITNESS
    # 2·1 + 2 - 5 = -1
    assert not lower(circuit).is_satisfied()
    circuit.set_values([("c", 4)])
    assert lower(circuit).is_satisfied()


def test_unknown_value_rejected(two_gate_source):
    circuit = Circuit.parse(two_gate_source)
    with pytest.raises(NoSuchValueError):
        circuit.set_values([("e", 1)])


def test_negative_values_are_field_negations():
    circuit = Circuit.parse("a + b = c")
    circuit.set_values({"a": -3, "b": 1, "c": -2})
    assert lower(circuit).is_satisfied()


def test_circuits_do_not_share_variables(two_gate_source):
    first = Circuit.parse(two_gate_source)
    second = Circuit.parse(two_gate_source)
    first.set_values({"a": 7})
    assert second.variables.lookup("a").value == 0


def test_structure_is_read_only(two_gate_source):
    circuit = Circuit.parse(two_gate_source)
    assert isinstance(circuit.expressions, tuple)
    with pytest.raises(AttributeError):
        circuit.expressions = ()


def test_parse_error_propagates():
    with pytest.raises(ParseError):
        Circuit.parse("a + = b")


def test_config_controls_field_and_coefficient_range():
    config = CompilerConfig(field_modulus=97, max_coefficient=100)
    circuit = Circuit.parse("100a = b", config)
    assert circuit.field.prime == 97
    circuit.set_values({"a": 1, "b": 3})
    assert lower(circuit).is_satisfied()
    with pytest.raises(CoefficientError):
        Circuit.parse("101a = b", config)


def test_from_file(circuit_file):
    circuit = Circuit.from_file(circuit_file)
    assert len(circuit) == 2
    assert circuit.expressions[1].line == 2


def test_from_file_rejects_undecodable_source(tmp_path):
    path = tmp_path / "bad.plonk"
    path.write_bytes(b"a + b = \xff\n")
    with pytest.raises(ParseError):
        Circuit.from_file(path)
