"""Token definitions for sci-calc expressions.

Defines the complete token vocabulary used by the lexer.  Every
operator, punctuation mark and literal kind is a member of the
``TokenType`` enum, and every scanned token is a ``Token`` dataclass
carrying its type, canonical text and source range.

Display glyphs (``×``, ``÷``, ``−``, ``π``) are normalized to canonical
values by the lexer, so the parser only ever sees one spelling per
operator or constant.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Exhaustive enumeration of all expression token types."""

    # -----------------------------------------------------------------
    # Literals and names
    # -----------------------------------------------------------------
    NUMBER = auto()
    IDENT = auto()

    # -----------------------------------------------------------------
    # Binary operators
    # -----------------------------------------------------------------
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    POWER = auto()

    # -----------------------------------------------------------------
    # Postfix / prefix sugar
    # -----------------------------------------------------------------
    SQUARE = auto()   # ²
    CUBE = auto()     # ³
    ROOT = auto()     # √

    # -----------------------------------------------------------------
    # Punctuation
    # -----------------------------------------------------------------
    LPAREN = auto()
    RPAREN = auto()

    EOF = auto()


# Single-character glyphs and their (token type, canonical value).
GLYPHS: dict[str, tuple[TokenType, str]] = {
    "+": (TokenType.PLUS, "+"),
    "-": (TokenType.MINUS, "-"),
    "−": (TokenType.MINUS, "-"),    # − minus sign
    "*": (TokenType.MULTIPLY, "*"),
    "×": (TokenType.MULTIPLY, "*"),  # ×
    "·": (TokenType.MULTIPLY, "*"),  # ·
    "/": (TokenType.DIVIDE, "/"),
    "÷": (TokenType.DIVIDE, "/"),    # ÷
    "^": (TokenType.POWER, "^"),
    "²": (TokenType.SQUARE, "²"),
    "³": (TokenType.CUBE, "³"),
    "√": (TokenType.ROOT, "√"),
    "(": (TokenType.LPAREN, "("),
    ")": (TokenType.RPAREN, ")"),
}

# Symbol glyphs that spell a named constant.
CONSTANT_GLYPHS: dict[str, str] = {
    "π": "pi",  # π
}

# Named constants and their values.
CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

# Names that are only valid as ``name(expr)`` calls.
FUNCTION_NAMES: frozenset[str] = frozenset(
    {"sin", "cos", "tan", "log", "ln", "sqrt", "recip"}
)

BINARY_OPERATORS: frozenset[TokenType] = frozenset(
    {
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.MULTIPLY,
        TokenType.DIVIDE,
        TokenType.POWER,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with its source range.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    value:
        Canonical text of the token (``"*"`` for ``×``, ``"pi"`` for ``π``).
    offset:
        0-based offset of the first character in the source.
    end:
        0-based offset *past* the last character in the source.
    """

    type: TokenType
    value: str
    offset: int
    end: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.offset})"

    def describe(self) -> str:
        """Return a short human-readable description for error messages."""
        if self.type is TokenType.EOF:
            return "end of expression"
        if self.type is TokenType.NUMBER:
            return f"number {self.value}"
        if self.type is TokenType.IDENT:
            return f"name {self.value!r}"
        return f"{self.value!r}"

    @property
    def is_function(self) -> bool:
        """Return True if this token names a function."""
        return self.type is TokenType.IDENT and self.value in FUNCTION_NAMES

    @property
    def is_constant(self) -> bool:
        """Return True if this token names a constant."""
        return self.type is TokenType.IDENT and self.value in CONSTANTS
