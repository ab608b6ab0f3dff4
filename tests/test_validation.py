import pytest

from plonkdsl.compiler import Circuit
from plonkdsl.compiler.expression import Expression, LinearTerm, PublicTerm, QuadraticTerm
from plonkdsl.compiler.validation import validate_expressions
from plonkdsl.errors import (
    PublicVariableCollisionError,
    RepeatedLinearVariableError,
    RoleConflictError,
    SameQuadraticVariablesError,
    TooManyQuadraticTermsError,
    TooManyVariablesError,
    ValidationError,
)


@pytest.mark.parametrize("position", [0, 1, 2])
def test_same_quadratic_operands_rejected_anywhere(position):
    lines = ["a + b = c", "x*y = z", "p - q = r"]
    lines.insert(position, "3a*a = w")
    with pytest.raises(SameQuadraticVariablesError) as info:
        Circuit.parse("\n".join(lines))
    assert info.value.equation_index == position
    assert info.value.line == position + 1


def test_four_distinct_names_compile():
    circuit = Circuit.parse("a*b + a + c = d")
    assert len(circuit) == 1
    assert set(circuit.variables.roles()) == {"a", "b", "c", "d"}


def test_fifth_distinct_name_rejected():
    with pytest.raises(TooManyVariablesError):
        Circuit.parse("a*b + a + c + e = d")


def test_more_wire_variables_than_wires_rejected():
    with pytest.raises(TooManyVariablesError):
        Circuit.parse("a*b + c + d = 0")
    with pytest.raises(TooManyVariablesError):
        Circuit.parse("a + b + c + d = 0")


def test_three_wire_variables_fit():
    Circuit.parse("a*b + a + b + c = 0")
    Circuit.parse("a + b + c = 0")
    Circuit.parse("a*b - c = 0")


def test_repeated_linear_variable_rejected():
    with pytest.raises(RepeatedLinearVariableError):
        Circuit.parse("a + b - a = c")


def test_public_collision_rejected():
    with pytest.raises(PublicVariableCollisionError):
        Circuit.parse("a*b = a")
    with pytest.raises(PublicVariableCollisionError):
        Circuit.parse("a + b = b")


def test_role_conflict_across_equations_rejected():
    with pytest.raises(RoleConflictError) as info:
        Circuit.parse("a + b = c\nc*d = e")
    assert info.value.equation_index == 1
    assert "'c'" in str(info.value)


def test_quadratic_count_reported_before_whole_program_checks():
    # equation 0 breaks the operand rule, equation 1 has two quadratic terms;
    # the quadratic count is checked while building, so it wins
    with pytest.raises(TooManyQuadraticTermsError) as info:
        Circuit.parse("a*a = b\nc*d + e*f = g")
    assert info.value.equation_index == 1


def test_checks_run_in_fixed_order():
    # equation 0 repeats a linear variable, equation 1 multiplies x by itself:
    # the operand pass runs first over every equation
    with pytest.raises(SameQuadraticVariablesError):
        Circuit.parse("a + a = b\nx*x = y")
    # five names (check 2) beats a later public collision (check 4)
    with pytest.raises(TooManyVariablesError):
        Circuit.parse("a*b = a\nq*r + s + t = u")


def test_all_validation_errors_share_a_base():
    with pytest.raises(ValidationError):
        Circuit.parse("a + b - a = c")
    with pytest.raises(ValueError):
        Circuit.parse("a + b - a = c")


def test_validate_hand_built_expressions():
    ok = [
        Expression(QuadraticTerm(False, 1, "a", "b"), (LinearTerm(False, 1, "a"),),
                   PublicTerm(False, "c")),
    ]
    validate_expressions(ok)
    bad = ok + [Expression(QuadraticTerm(False, 1, "x", "x"))]
    with pytest.raises(SameQuadraticVariablesError) as info:
        validate_expressions(bad)
    assert info.value.equation_index == 1
    assert info.value.line is None


def test_wire_overflow_names_the_variables():
    with pytest.raises(TooManyVariablesError) as info:
        Circuit.parse("a*b + c + d = 0")
    message = str(info.value)
    assert "4 wire variables (a, b, c, d) for 3 wires" in message
    assert "only the output wire is free" in message


def test_public_input_reused_on_a_wire_later_is_a_role_conflict():
    with pytest.raises(RoleConflictError) as info:
        Circuit.parse("x + y = p\np*q = r")
    assert info.value.equation_index == 1
    assert info.value.line == 2
    assert "'p' (see equation 0)" in str(info.value)
