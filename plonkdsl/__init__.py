"""
plonk-dsl
=========

A small compiler from arithmetic equations over named variables to Plonk
gates of the form

    q_m·a·b + q_l·a + q_r·b + q_o·o + q_c + PI = 0

Modules:
    - frontend: Grammar and parser producing typed parse nodes
    - compiler: Expression model, validation, variable table, gate lowering
    - backend: Gate builder, composer interface, reference constraint system
    - common: Shared utilities (field arithmetic)

Quick Start:
    >>> from plonkdsl import Circuit, lower
    >>> circuit = Circuit.parse("a + b = c\\na*b = d")
    >>> circuit.set_values({"a": 1, "b": 1, "c": 2, "d": 1})
    >>> lower(circuit).is_satisfied()
    True
"""

__version__ = "0.1.0"

from . import common
from . import frontend
from . import compiler
from . import backend

from .compiler import Circuit, lower
from .config import CompilerConfig, load_config
from .errors import PlonkDslError

__all__ = [
    "Circuit",
    "lower",
    "CompilerConfig",
    "load_config",
    "PlonkDslError",
]
