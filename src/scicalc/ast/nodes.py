"""AST node definitions for sci-calc expressions.

Every node produced by the parser is a frozen dataclass, so expression
trees are immutable and hashable.  The ``Expression`` union covers all
node variants; the evaluator, formatter and serializer dispatch on them
with ``isinstance`` checks.

All nodes carry a ``Span`` recording which part of the source text they
were parsed from, so evaluator errors can point back into the input.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` within the source text."""

    start: int
    end: int

    def __repr__(self) -> str:
        return f"Span({self.start}:{self.end})"

    @classmethod
    def unknown(cls) -> "Span":
        """Return a sentinel span used when position info is unavailable."""
        return cls(start=0, end=0)

    def merge(self, other: "Span") -> "Span":
        """Return a span that covers both ``self`` and ``other``."""
        return Span(start=min(self.start, other.start), end=max(self.end, other.end))


# ---------------------------------------------------------------------------
# Operator enums
# ---------------------------------------------------------------------------


class BinOp(Enum):
    """Binary operators, valued by their canonical symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class UnaryOpKind(Enum):
    """Prefix operators."""

    NEG = "-"
    POS = "+"


class PostfixKind(Enum):
    """Postfix power markers, valued by their display glyph."""

    SQUARE = "²"
    CUBE = "³"

    @property
    def exponent(self) -> int:
        return 2 if self is PostfixKind.SQUARE else 3


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NumberLit:
    """A numeric literal, e.g. ``3.5`` or ``1e-7``."""

    value: float
    span: Span


@dataclass(frozen=True, slots=True)
class Constant:
    """A named constant reference (``pi``, ``e``) with its resolved value."""

    name: str
    value: float
    span: Span


# ---------------------------------------------------------------------------
# Composite nodes
# ---------------------------------------------------------------------------


Expression = Union[
    "NumberLit",
    "Constant",
    "BinaryOpExpr",
    "UnaryOpExpr",
    "PostfixExpr",
    "FunctionCall",
    "Grouping",
]


@dataclass(frozen=True, slots=True)
class BinaryOpExpr:
    """A binary operator expression, e.g. ``a + b`` or ``a ^ b``."""

    op: BinOp
    left: "Expression"
    right: "Expression"
    span: Span


@dataclass(frozen=True, slots=True)
class UnaryOpExpr:
    """A prefix operator applied to an operand, e.g. ``-x``."""

    op: UnaryOpKind
    operand: "Expression"
    span: Span


@dataclass(frozen=True, slots=True)
class PostfixExpr:
    """A square or cube marker applied to the preceding operand, e.g. ``3²``."""

    op: PostfixKind
    operand: "Expression"
    span: Span


@dataclass(frozen=True, slots=True)
class FunctionCall:
    """A unary function applied to a single argument, e.g. ``sin(30)``."""

    name: str
    argument: "Expression"
    span: Span


@dataclass(frozen=True, slots=True)
class Grouping:
    """A parenthesized sub-expression.

    Grouping has no effect on the value; it is kept so the formatter can
    reproduce the parentheses the user wrote.
    """

    inner: "Expression"
    span: Span


def children(expr: "Expression") -> tuple["Expression", ...]:
    """Return the direct sub-expressions of ``expr``, left to right."""
    if isinstance(expr, BinaryOpExpr):
        return (expr.left, expr.right)
    if isinstance(expr, (UnaryOpExpr, PostfixExpr)):
        return (expr.operand,)
    if isinstance(expr, FunctionCall):
        return (expr.argument,)
    if isinstance(expr, Grouping):
        return (expr.inner,)
    return ()


def depth(expr: "Expression") -> int:
    """Return the height of the expression tree (a leaf has depth 1).

    Walks the tree with an explicit stack, so long operator chains do not
    hit the interpreter's recursion limit.
    """
    deepest = 0
    stack: list[tuple["Expression", int]] = [(expr, 1)]
    while stack:
        node, level = stack.pop()
        deepest = max(deepest, level)
        stack.extend((child, level + 1) for child in children(node))
    return deepest
