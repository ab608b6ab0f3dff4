"""
Compiler configuration.

Defaults target the BLS12-381 scalar field and unsigned 64-bit
coefficients. A JSON file can override any subset of the settings.

Example:
    >>> config = load_config("plonkdsl.json")
    >>> circuit = Circuit.parse(text, config=config)
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .common.field import PrimeField
from .errors import ConfigError

U64_MAX = (1 << 64) - 1

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CompilerConfig:
    """
    Settings shared by the parser, the compiler and the command line.

    Attributes:
        field_modulus: Prime modulus of the circuit's field
        max_coefficient: Largest coefficient literal accepted in source text
        log_level: Level name for the command-line logger
        output_suffix: Suffix of the gate listing written by `compile`
    """
    field_modulus: int = PrimeField.BLS12_381_SCALAR_PRIME
    max_coefficient: int = U64_MAX
    log_level: str = "WARNING"
    output_suffix: str = ".gates.json"

    def __post_init__(self):
        """Validate configuration."""
        if isinstance(self.field_modulus, bool) or not isinstance(self.field_modulus, int):
            raise ConfigError("field_modulus must be an integer")
        if self.field_modulus < 2:
            raise ConfigError("field_modulus must be at least 2")
        if isinstance(self.max_coefficient, bool) or not isinstance(self.max_coefficient, int):
            raise ConfigError("max_coefficient must be an integer")
        if self.max_coefficient < 0:
            raise ConfigError("max_coefficient must not be negative")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        if not self.output_suffix:
            raise ConfigError("output_suffix must not be empty")

    @property
    def field(self) -> PrimeField:
        return PrimeField(self.field_modulus)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  base: Optional[CompilerConfig] = None) -> CompilerConfig:
        """
        Build a config from a dictionary, shallow-merged over `base`.

        Unknown keys are rejected rather than silently ignored.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")
        merged = (base or cls()).to_dict()
        merged.update(data)
        return cls(**merged)


DEFAULT_CONFIG = CompilerConfig()


def load_config(path: Union[str, Path],
                base: Optional[CompilerConfig] = None) -> CompilerConfig:
    """
    Load a JSON config file and merge it into base (shallow merge).

    :param path: path to JSON config file
    :param base: configuration to update (if None use the defaults)
    :return: merged configuration
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with p.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must hold a JSON object")
    return CompilerConfig.from_dict(data, base=base)
