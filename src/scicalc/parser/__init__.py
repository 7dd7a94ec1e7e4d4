"""sci-calc parser module.

Exports the ``Parser`` class and the ``parse`` convenience function.
"""
from __future__ import annotations

from scicalc.parser.parser import Parser, parse

__all__ = ["Parser", "parse"]
