import json

import pytest

from plonkdsl.main import EXIT_ERROR, EXIT_OK, EXIT_UNSATISFIED, main
from plonkdsl.runner import parse_assignment

VALUES = ["--val", "a=1", "--val", "b=1", "--val", "c=2", "--val", "d=1"]


def test_compile_writes_listing(circuit_file, capsys):
    assert main(["compile", str(circuit_file)]) == EXIT_OK
    out = capsys.readouterr().out.strip()
    assert out.endswith("two_gates.plonk.gates.json")

    with open(out, encoding="utf-8") as fh:
        listing = json.load(fh)
    assert listing["num_gates"] == 2
    assert listing["padded_gates"] == 8
    assert listing["public_inputs"] == ["c", "d"]
    assert listing["witnesses"] == ["a", "b"]
    first, second = listing["gates"]
    assert first["equation"] == "a + b = c"
    assert first["line"] == 1
    assert first["selectors"] == {"q_m": 0, "q_l": 1, "q_r": 1, "q_o": 0, "q_c": 0, "pi": 0}
    assert first["wires"] == {"a": "a", "b": "b", "o": None}
    assert first["witness_indices"] == [1, 2, 0]
    assert second["selectors"]["q_m"] == 1
    assert second["wires"] == {"a": "a", "b": "b", "o": None}


def test_compile_to_explicit_output(circuit_file, tmp_path):
    target = tmp_path / "out" / "listing.json"
    assert main(["compile", str(circuit_file), "-o", str(target)]) == EXIT_OK
    assert json.loads(target.read_text())["num_gates"] == 2


def test_check_satisfied(circuit_file, capsys):
    assert main(["check", str(circuit_file)] + VALUES) == EXIT_OK
    assert "ok: 2 gate(s) satisfied" in capsys.readouterr().out


def test_check_unsatisfied(circuit_file, capsys):
    args = ["check", str(circuit_file), "--val", "a=1", "--val", "b=1", "--val", "c=3"]
    assert main(args) == EXIT_UNSATISFIED
    out = capsys.readouterr().out.splitlines()
    # gate 0: 1 + 1 - 3, gate 1: 1·1 - 0
    assert out == [
        "unsatisfied: line 1: a + b = c (gate evaluates to -1)",
        "unsatisfied: line 2: a*b = d (gate evaluates to 1)",
    ]


def test_inputs_prints_name_ordered_vector(tmp_path, capsys):
    path = tmp_path / "inputs.plonk"
    path.write_text("x = z\ny = -a\n")
    assert main(["inputs", str(path), "--val", "z=5", "--val", "a=-1"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["a=-1", "z=5"]


def test_unknown_variable_is_an_error(circuit_file, capsys):
    assert main(["check", str(circuit_file), "--val", "nope=1"]) == EXIT_ERROR
    assert "no such value: 'nope'" in capsys.readouterr().err


def test_parse_error_is_an_error(tmp_path, capsys):
    path = tmp_path / "bad.plonk"
    path.write_text("a + = b\n")
    assert main(["compile", str(path)]) == EXIT_ERROR
    assert capsys.readouterr().err.startswith("error:")


def test_missing_source_is_an_error(tmp_path, capsys):
    assert main(["compile", str(tmp_path / "absent.plonk")]) == EXIT_ERROR
    assert "error:" in capsys.readouterr().err


def test_config_option(circuit_file, tmp_path, capsys):
    config = tmp_path / "plonkdsl.json"
    config.write_text(json.dumps({"field_modulus": 97, "output_suffix": ".out.json"}))
    # d = 98 is d = 1 modulo 97
    values = ["--val", "a=1", "--val", "b=1", "--val", "c=2", "--val", "d=98"]
    assert main(["-c", str(config), "check", str(circuit_file)] + values) == EXIT_OK
    assert main(["-c", str(config), "compile", str(circuit_file)]) == EXIT_OK
    assert capsys.readouterr().out.strip().splitlines()[-1].endswith(".plonk.out.json")


def test_bad_config_is_an_error(circuit_file, tmp_path, capsys):
    config = tmp_path / "plonkdsl.json"
    config.write_text(json.dumps({"colour": "blue"}))
    assert main(["-c", str(config), "compile", str(circuit_file)]) == EXIT_ERROR
    assert "colour" in capsys.readouterr().err


def test_malformed_assignment_rejected_by_argparse(circuit_file):
    with pytest.raises(SystemExit) as info:
        main(["check", str(circuit_file), "--val", "a"])
    assert info.value.code == 2


@pytest.mark.parametrize("text, expected", [
    ("a=1", ("a", 1)),
    ("c = -2", ("c", -2)),
    ("x_1=007", ("x_1", 7)),
])
def test_parse_assignment(text, expected):
    assert parse_assignment(text) == expected


@pytest.mark.parametrize("text", ["a", "=1", "a=one", "a="])
def test_parse_assignment_rejects(text):
    with pytest.raises(ValueError):
        parse_assignment(text)


def test_source_that_is_not_utf8_is_an_error(tmp_path, capsys):
    path = tmp_path / "latin1.plonk"
    path.write_bytes(b"a + b = \xff\n")
    assert main(["compile", str(path)]) == EXIT_ERROR
    assert "not valid UTF-8" in capsys.readouterr().err
