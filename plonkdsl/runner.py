"""
runner.py
High-level pipeline: source file -> circuit -> gates, plus the JSON gate
listing written by `plonkdsl compile`.

Listing layout:

    {
      "source": "circuit.plonk",
      "num_gates": 2,
      "padded_gates": 8,
      "public_inputs": ["c", "d"],
      "witnesses": ["a", "b"],
      "gates": [
        {"equation": "a + b = c", "line": 1,
         "selectors": {"q_m": 0, "q_l": 1, "q_r": 1, "q_o": 0, "q_c": 0, "pi": 0},
         "wires": {"a": "a", "b": "b", "o": null},
         "witness_indices": [1, 2, 0]},
        ...
      ]
    }

Selectors are printed as signed integers (p - 1 reads as -1). Witness
index 0 is the reserved zero witness bound to unused wires. The "pi"
column holds the public value at lowering time, zero for a listing
compiled without values.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .backend.composer import SELECTOR_NAMES
from .compiler.circuit import Circuit
from .compiler.lowering import LoweredCircuit, WireRole, lower, plan_gate
from .config import CompilerConfig
from .utils import write_json_atomic

logger = logging.getLogger(__name__)


def parse_assignment(text: str) -> Tuple[str, int]:
    """
    Parse a NAME=VALUE pair as given on the command line.

    :param text: e.g. "a=1" or "c = -2"
    :raises ValueError: no `=` or the value is not an integer
    """
    if "=" not in text:
        raise ValueError(f"invalid NAME=VALUE: no `=` found in {text!r}")
    name, value = text.split("=", 1)
    name = name.strip()
    if not name:
        raise ValueError(f"invalid NAME=VALUE: empty name in {text!r}")
    try:
        return name, int(value.strip())
    except ValueError:
        raise ValueError(f"invalid NAME=VALUE: {value.strip()!r} is not an integer") from None


def build_listing(circuit: Circuit, lowered: LoweredCircuit, source: str = "") -> Dict[str, Any]:
    """
    Describe lowered gates in a JSON-serializable dictionary.

    Rows come from the lowered selector and wire tables; the zero padding
    up to `padded_gates` is left out and only its size is recorded.
    """
    field = lowered.system.field
    selectors = lowered.selector_table(padded=False)
    wires = lowered.wire_table(padded=False)
    gates = []
    for row, expr in enumerate(circuit.expressions):
        bindings = plan_gate(expr).bindings
        gates.append({
            "equation": str(expr),
            "line": expr.line,
            "selectors": {
                name: field.element(int(value)).to_signed()
                for name, value in zip(SELECTOR_NAMES, selectors[row])
            },
            "wires": {wire.value: bindings.get(wire) for wire in WireRole},
            "witness_indices": [int(index) for index in wires[row]],
        })
    return {
        "source": source,
        "num_gates": len(lowered.gates),
        "padded_gates": lowered.padded_gates,
        "public_inputs": circuit.public_input_names(),
        "witnesses": [name for name, _ in circuit.variables.witnesses()],
        "gates": gates,
    }


def run_compile(input_path: str, output_path: Optional[str] = None,
                config: Optional[CompilerConfig] = None) -> Path:
    """
    Compile a source file and write its gate listing.

    :param input_path: path to the equation source
    :param output_path: listing path (default: input path + config.output_suffix)
    :return: path of the written listing
    """
    cfg = config or CompilerConfig()
    circuit = Circuit.from_file(input_path, cfg)
    lowered = lower(circuit)

    out = Path(output_path) if output_path else Path(str(input_path) + cfg.output_suffix)
    write_json_atomic(str(out), build_listing(circuit, lowered, source=str(input_path)))
    logger.info("wrote %d gate(s) to %s", len(lowered.gates), out)
    return out


def run_check(input_path: str, values: Iterable[Tuple[str, int]],
              config: Optional[CompilerConfig] = None) -> Tuple[Circuit, LoweredCircuit]:
    """Compile a source file, supply values and lower it."""
    cfg = config or CompilerConfig()
    circuit = Circuit.from_file(input_path, cfg)
    circuit.set_values(list(values))
    return circuit, lower(circuit)


def describe_failures(circuit: Circuit, lowered: LoweredCircuit) -> List[str]:
    """One human-readable line per unsatisfied gate."""
    lines = []
    for index in lowered.system.unsatisfied_gates():
        expr = circuit.expressions[index]
        residue = lowered.system.evaluate(lowered.gates[index]).to_signed()
        where = f"line {expr.line}" if expr.line is not None else f"gate {index}"
        lines.append(f"{where}: {expr} (gate evaluates to {residue})")
    return lines
