"""Shared test fixtures for sci-calc.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from scicalc.calculator import Calculator
from scicalc.config import AngleUnit, EvaluatorConfig


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "scicalc"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def calculator() -> Calculator:
    """A calculator with the default configuration (degrees, 12 digits)."""
    return Calculator()


@pytest.fixture()
def radians_calculator() -> Calculator:
    """A calculator whose trigonometric functions take radians."""
    return Calculator(EvaluatorConfig(angle_unit=AngleUnit.RADIANS))
