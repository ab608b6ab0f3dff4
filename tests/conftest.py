import pytest

from plonkdsl.common.field import PrimeField

# a + b = c ; a*b = d  with a = b = 1, c = 2, d = 1
TWO_GATE_SOURCE = """\
a + b = c
a*b = d
"""


@pytest.fixture
def small_field():
    return PrimeField(97)


@pytest.fixture
def two_gate_source():
    return TWO_GATE_SOURCE


@pytest.fixture
def circuit_file(tmp_path):
    path = tmp_path / "two_gates.plonk"
    path.write_text(TWO_GATE_SOURCE, encoding="utf-8")
    return path
