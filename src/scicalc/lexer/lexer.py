"""sci-calc lexer: converts raw expression text into a flat list of tokens.

The lexer is a single-pass character scanner.  It records the source
range of every token so parser and evaluator errors can point at the
offending part of the expression.

Numbers are digit runs with at most one decimal point (``.5`` and ``5.``
are accepted, a lone ``.`` is not) and an optional exponent suffix:
``1e5``, ``2.5E-7``.  An ``e`` directly after a number only counts as an
exponent marker when a (signed) digit follows it; in every other place
``e`` is Euler's constant.  The ``-`` sign is never part of a literal, the
parser handles it as a unary operator.

Identifiers are runs of ASCII letters and must be a known function or
constant name; a whole run is matched, so ``e`` is never split out of a
longer word.
"""
from __future__ import annotations

from typing import Final

from scicalc.errors import UnexpectedCharError
from scicalc.grammar.tokens import (
    CONSTANT_GLYPHS,
    CONSTANTS,
    FUNCTION_NAMES,
    GLYPHS,
    Token,
    TokenType,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WHITESPACE: Final[frozenset[str]] = frozenset(" \t\r\n")
_DIGITS: Final[frozenset[str]] = frozenset("0123456789")
_LETTERS: Final[frozenset[str]] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)
_KNOWN_NAMES: Final[frozenset[str]] = FUNCTION_NAMES | frozenset(CONSTANTS)


class Lexer:
    """Single-pass expression lexer.

    Parameters
    ----------
    source:
        The complete expression text to tokenize.
    """

    __slots__ = ("_source", "_pos", "_tokens")

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._pos: int = 0
        self._tokens: list[Token] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return the complete token list.

        The list always ends with an ``EOF`` token positioned at the end
        of the source.

        Raises
        ------
        UnexpectedCharError
            On any character that cannot begin a valid token.
        """
        while self._pos < len(self._source):
            self._scan_one()
        end = len(self._source)
        self._tokens.append(Token(TokenType.EOF, "", end, end))
        return self._tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position without advancing."""
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character at ``pos + offset`` without advancing."""
        idx = self._pos + offset
        return self._source[idx] if idx < len(self._source) else ""

    def _emit(self, token_type: TokenType, value: str, start: int) -> None:
        self._tokens.append(Token(token_type, value, start, self._pos))

    def _scan_one(self) -> None:
        """Scan exactly one token (or skip whitespace)."""
        start = self._pos
        ch = self._current()

        if ch in _WHITESPACE:
            self._pos += 1
            return

        if ch in _DIGITS or (ch == "." and self._peek() in _DIGITS):
            self._scan_number(start)
            return

        if ch in _LETTERS:
            self._scan_ident(start)
            return

        # ``**`` is accepted as an alias for ``^``
        if ch == "*" and self._peek() == "*":
            self._pos += 2
            self._emit(TokenType.POWER, "^", start)
            return

        if ch in GLYPHS:
            token_type, value = GLYPHS[ch]
            self._pos += 1
            self._emit(token_type, value, start)
            return

        if ch in CONSTANT_GLYPHS:
            self._pos += 1
            self._emit(TokenType.IDENT, CONSTANT_GLYPHS[ch], start)
            return

        if ch == ".":
            raise UnexpectedCharError(ch, start, "Decimal point without digits")
        raise UnexpectedCharError(ch, start)

    # ------------------------------------------------------------------
    # Token-specific scanners
    # ------------------------------------------------------------------

    def _consume_digits(self) -> None:
        while self._current() in _DIGITS:
            self._pos += 1

    def _scan_number(self, start: int) -> None:
        """Consume a decimal literal with an optional exponent suffix."""
        self._consume_digits()
        if self._current() == ".":
            self._pos += 1
            self._consume_digits()
        if self._current() == ".":
            raise UnexpectedCharError(".", self._pos, "Second decimal point in number")

        if self._current() in ("e", "E"):
            sign = self._peek() in ("+", "-")
            first_digit = self._peek(2) if sign else self._peek()
            if first_digit in _DIGITS:
                self._pos += 2 if sign else 1
                self._consume_digits()

        self._emit(TokenType.NUMBER, self._source[start : self._pos], start)

    def _scan_ident(self, start: int) -> None:
        """Consume a letter run and check it against the known names."""
        while self._current() in _LETTERS:
            self._pos += 1
        word = self._source[start : self._pos]
        if word not in _KNOWN_NAMES:
            raise UnexpectedCharError(
                self._source[start], start, f"Unknown name {word!r}"
            )
        self._emit(TokenType.IDENT, word, start)


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string and return the complete token list.

    Parameters
    ----------
    source:
        Expression text, e.g. ``"2 × sin(30) + π"``.

    Returns
    -------
    list[Token]
        All tokens, terminated by ``EOF``.

    Raises
    ------
    UnexpectedCharError
        If the source contains a character or name outside the grammar.

    Example
    -------
    ::

        from scicalc.lexer import tokenize
        tokens = tokenize("(2+3)×4")
    """
    return Lexer(source).tokenize()
