"""sci-calc CLI module."""
from __future__ import annotations

from scicalc.cli.main import cli

__all__ = ["cli"]
