"""Evaluator configuration.

``EvaluatorConfig`` is an immutable settings object shared by the
parser and the evaluator.  It can be built directly, from a plain
mapping, or from a YAML file::

    # calc.yaml
    scicalc:
      precision: 10
      angle_unit: radians
      max_depth: 32

    from scicalc.config import load_config
    config = load_config("calc.yaml")
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from scicalc.errors import ConfigError

logger = logging.getLogger(__name__)

MAX_PRECISION = 15
# One nesting level costs up to nine parser frames; MAX_DEPTH levels must
# fit within the default interpreter recursion limit.
MAX_DEPTH = 80


class AngleUnit(Enum):
    """Unit in which trigonometric function arguments are given."""

    DEGREES = "degrees"
    RADIANS = "radians"


@dataclass(frozen=True)
class EvaluatorConfig:
    """Settings for a single evaluation.

    Parameters
    ----------
    precision:
        Number of decimal digits the final result is rounded to
        (0 to 15, default 12).
    angle_unit:
        Unit of ``sin``/``cos``/``tan`` arguments (default degrees).
    max_depth:
        Deepest allowed nesting of parentheses, function calls, prefix
        signs, ``^`` chains and ``²``/``³`` markers (1 to 80, default 64).
    """

    precision: int = 12
    angle_unit: AngleUnit = AngleUnit.DEGREES
    max_depth: int = 64

    def __post_init__(self) -> None:
        if isinstance(self.angle_unit, str):
            object.__setattr__(self, "angle_unit", _parse_angle_unit(self.angle_unit))
        if not isinstance(self.angle_unit, AngleUnit):
            raise ConfigError(f"angle_unit must be an AngleUnit, got {self.angle_unit!r}")
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ConfigError(f"precision must be an integer, got {self.precision!r}")
        if not 0 <= self.precision <= MAX_PRECISION:
            raise ConfigError(
                f"precision must be between 0 and {MAX_PRECISION}, got {self.precision}"
            )
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigError(f"max_depth must be an integer, got {self.max_depth!r}")
        if not 1 <= self.max_depth <= MAX_DEPTH:
            raise ConfigError(
                f"max_depth must be between 1 and {MAX_DEPTH}, got {self.max_depth}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EvaluatorConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown config key(s): {', '.join(unknown)}. "
                f"Valid keys: {', '.join(sorted(known))}"
            )
        return cls(**dict(data))

    def replace(self, **changes: Any) -> "EvaluatorConfig":
        """Return a copy with the given fields changed."""
        merged = {f.name: getattr(self, f.name) for f in fields(self)}
        merged.update({k: v for k, v in changes.items() if v is not None})
        return EvaluatorConfig.from_dict(merged)

    def to_dict(self) -> dict[str, Any]:
        """Return the config as a YAML/JSON-friendly dict."""
        return {
            "precision": self.precision,
            "angle_unit": self.angle_unit.value,
            "max_depth": self.max_depth,
        }


DEFAULT_CONFIG = EvaluatorConfig()


def _parse_angle_unit(value: str) -> AngleUnit:
    try:
        return AngleUnit(value.strip().lower())
    except ValueError:
        valid = ", ".join(u.value for u in AngleUnit)
        raise ConfigError(f"angle_unit must be one of {valid}, got {value!r}") from None


def load_config(path: str | Path) -> EvaluatorConfig:
    """Load an ``EvaluatorConfig`` from a YAML file.

    The file holds either the settings mapping itself or a mapping with a
    top-level ``scicalc`` section.  An empty file yields the defaults.

    Raises
    ------
    ConfigError
        If the file is not valid YAML, is not a mapping, or contains
        unknown keys or invalid values.
    OSError
        If the file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config file {path} must contain a mapping")
    if "scicalc" in data:
        data = data["scicalc"] or {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"'scicalc' section in {path} must be a mapping")

    config = EvaluatorConfig.from_dict(data)
    logger.debug("Loaded config from %s: %r", path, config)
    return config
