"""sci-calc formatting: results, expression trees and token lists to text.

Three helpers live here:

- ``format_result`` renders a computed value the way the calculator
  display shows it (plain decimal, or exponential for very large and very
  small magnitudes).  Its output is always valid input for ``evaluate``.
- ``ExpressionFormatter`` / ``format_expression`` render a tree as
  canonical expression text with spaces around binary operators and
  parentheses wherever the tree structure needs them.
- ``detokenize`` renders a token list back to canonical text.

Usage
-----
::

    from scicalc.formatter import format_expression, format_result
    from scicalc.parser import parse

    format_expression(parse("(2+3)×4"))  # '(2 + 3) * 4'
    format_result(1234.5)                 # '1234.5'
"""
from __future__ import annotations

import math
from decimal import Decimal

from scicalc.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    Constant,
    Expression,
    FunctionCall,
    Grouping,
    NumberLit,
    PostfixExpr,
    UnaryOpExpr,
)
from scicalc.errors import NonFiniteResultError
from scicalc.grammar.tokens import BINARY_OPERATORS, Token, TokenType

EXPONENTIAL_UPPER = 1e15
EXPONENTIAL_LOWER = 1e-6

# Display glyphs used when ``glyphs=True``.
_DISPLAY_GLYPHS: dict[str, str] = {
    "*": "×",  # ×
    "/": "÷",  # ÷
    "pi": "π",  # π
}

# Binding strength, loosest first.
_PREC_SUM = 1
_PREC_TERM = 2
_PREC_UNARY = 3
_PREC_POWER = 4
_PREC_POSTFIX = 5
_PREC_ATOM = 6

_BINOP_PREC: dict[BinOp, int] = {
    BinOp.ADD: _PREC_SUM,
    BinOp.SUB: _PREC_SUM,
    BinOp.MUL: _PREC_TERM,
    BinOp.DIV: _PREC_TERM,
    BinOp.POW: _PREC_POWER,
}

_WORD_TOKENS = frozenset({TokenType.NUMBER, TokenType.IDENT})
_OPERAND_END_TOKENS = frozenset(
    {TokenType.NUMBER, TokenType.IDENT, TokenType.RPAREN, TokenType.SQUARE, TokenType.CUBE}
)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def format_result(value: float) -> str:
    """Render a result for display.

    Values with magnitude ``>= 1e15``, or nonzero magnitude ``< 1e-6``, use
    exponential notation with 6 fractional digits (``1.500000e+20``).
    Integral values drop the fraction (``14``); everything else is the
    shortest plain decimal that round-trips (``0.3``, ``0.00001``).

    Raises
    ------
    NonFiniteResultError
        If ``value`` is infinite or NaN.
    """
    if not math.isfinite(value):
        raise NonFiniteResultError()
    magnitude = abs(value)
    if magnitude >= EXPONENTIAL_UPPER or (value != 0 and magnitude < EXPONENTIAL_LOWER):
        return f"{value:.6e}"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _format_number(value: float) -> str:
    if value.is_integer() and abs(value) < EXPONENTIAL_UPPER:
        return str(int(value))
    return repr(value)


# ---------------------------------------------------------------------------
# Expression trees
# ---------------------------------------------------------------------------


class ExpressionFormatter:
    """Produces canonical expression text from a tree.

    Parameters
    ----------
    glyphs:
        When ``True``, use the display glyphs ``×``, ``÷`` and ``π``
        instead of ``*``, ``/`` and ``pi``.
    """

    def __init__(self, glyphs: bool = False) -> None:
        self._glyphs = glyphs

    def format(self, expr: Expression) -> str:
        """Render ``expr`` as a single line of expression text."""
        return self._format(expr)

    def _symbol(self, text: str) -> str:
        if self._glyphs:
            return _DISPLAY_GLYPHS.get(text, text)
        return text

    def _wrap(self, expr: Expression, min_prec: int) -> str:
        text = self._format(expr)
        if _precedence(expr) < min_prec:
            return f"({text})"
        return text

    def _format(self, expr: Expression) -> str:
        if isinstance(expr, NumberLit):
            return _format_number(expr.value)
        if isinstance(expr, Constant):
            return self._symbol(expr.name)
        if isinstance(expr, Grouping):
            return f"({self._format(expr.inner)})"
        if isinstance(expr, FunctionCall):
            return f"{expr.name}({self._format(expr.argument)})"
        if isinstance(expr, UnaryOpExpr):
            return f"{expr.op.value}{self._wrap(expr.operand, _PREC_UNARY)}"
        if isinstance(expr, PostfixExpr):
            return f"{self._wrap(expr.operand, _PREC_ATOM)}{expr.op.value}"
        if isinstance(expr, BinaryOpExpr):
            if expr.op is BinOp.POW:
                # right associative: only the left side needs a tighter operand
                prec = _BINOP_PREC[expr.op]
                left = self._wrap(expr.left, prec + 1)
                right = self._wrap(expr.right, prec)
                return f"{left} {self._symbol(expr.op.value)} {right}"
            return self._format_chain(expr)
        raise TypeError(f"Unknown expression type: {type(expr)}")

    def _format_chain(self, expr: BinaryOpExpr) -> str:
        """Render a left-leaning chain of ``+ - * /`` without recursing on the spine."""
        pending: list[str] = []
        node: Expression = expr
        while isinstance(node, BinaryOpExpr) and node.op is not BinOp.POW:
            prec = _BINOP_PREC[node.op]
            pending.append(f"{self._symbol(node.op.value)} {self._wrap(node.right, prec + 1)}")
            if _precedence(node.left) < prec:
                head = f"({self._format(node.left)})"
                break
            node = node.left
        else:
            head = self._format(node)
        return " ".join([head, *reversed(pending)])


def _precedence(expr: Expression) -> int:
    if isinstance(expr, BinaryOpExpr):
        return _BINOP_PREC[expr.op]
    if isinstance(expr, UnaryOpExpr):
        return _PREC_UNARY
    if isinstance(expr, PostfixExpr):
        return _PREC_POSTFIX
    if isinstance(expr, NumberLit) and expr.value < 0:
        return _PREC_UNARY
    return _PREC_ATOM


def format_expression(expr: Expression, glyphs: bool = False) -> str:
    """Render an expression tree as canonical text.

    Parameters
    ----------
    expr:
        The tree to render.
    glyphs:
        Use ``×``, ``÷`` and ``π`` instead of their ASCII spellings.
    """
    return ExpressionFormatter(glyphs=glyphs).format(expr)


# ---------------------------------------------------------------------------
# Token lists
# ---------------------------------------------------------------------------


def detokenize(tokens: list[Token], glyphs: bool = False) -> str:
    """Render a token list back to canonical expression text.

    Binary operators are surrounded by single spaces; prefix signs are
    attached to their operand.  Re-tokenizing the result yields the same
    token types and values, so the expression keeps its value.
    """
    parts: list[str] = []
    previous: Token | None = None
    for tok in tokens:
        if tok.type is TokenType.EOF:
            break
        text = _DISPLAY_GLYPHS.get(tok.value, tok.value) if glyphs else tok.value
        is_binary = (
            tok.type in BINARY_OPERATORS
            and previous is not None
            and previous.type in _OPERAND_END_TOKENS
        )
        if is_binary:
            parts.append(f" {text} ")
        elif previous is not None and previous.type in _WORD_TOKENS and tok.type in _WORD_TOKENS:
            # keep adjacent names/numbers from fusing into one word
            parts.append(f" {text}")
        else:
            parts.append(text)
        previous = tok
    return "".join(parts)
