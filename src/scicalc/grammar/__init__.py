"""sci-calc grammar module.

Exports the token vocabulary shared by the lexer and parser.
"""
from __future__ import annotations

from scicalc.grammar.tokens import (
    BINARY_OPERATORS,
    CONSTANT_GLYPHS,
    CONSTANTS,
    FUNCTION_NAMES,
    GLYPHS,
    Token,
    TokenType,
)

__all__ = [
    "Token",
    "TokenType",
    "GLYPHS",
    "CONSTANT_GLYPHS",
    "CONSTANTS",
    "FUNCTION_NAMES",
    "BINARY_OPERATORS",
]
