"""sci-calc, a scientific expression evaluator: lexer, parser, evaluator, formatter.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import scicalc

    scicalc.evaluate("2 + 3 × 4")           # 14.0
    scicalc.evaluate("sin(30)")             # 0.5 (degrees)
    scicalc.evaluate("2^3^2")               # 512.0
    scicalc.format_result(1e20)             # '1.000000e+20'
    scicalc.is_valid_expression("(2+3")     # False

    try:
        scicalc.evaluate("sqrt(-1)")
    except scicalc.DomainError as exc:
        print(exc.code, exc)

    scicalc.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from scicalc.calculator import Calculator, default_calculator
from scicalc.config import AngleUnit, EvaluatorConfig, load_config
from scicalc.errors import (
    ConfigError,
    DivisionByZeroError,
    DomainError,
    EmptyExpressionError,
    ErrorKind,
    EvalError,
    NestingTooDeepError,
    NonFiniteResultError,
    UnbalancedParenthesesError,
    UnexpectedCharError,
    UnexpectedTokenError,
)

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from scicalc.ast.nodes import Expression
    from scicalc.grammar.tokens import Token


def evaluate(expression: str) -> float:
    """Evaluate an expression string and return its numeric value.

    Parameters
    ----------
    expression:
        Expression text using numbers, ``+ - × ÷ ^``, parentheses,
        ``π``/``e``, ``²``/``³`` and the functions ``sin cos tan log ln
        sqrt recip``.

    Returns
    -------
    float
        A finite value rounded to 12 decimal digits.

    Raises
    ------
    EvalError
        The specific failure kind; see ``scicalc.errors``.
    """
    return default_calculator.evaluate(expression)


def format_result(value: float) -> str:
    """Render a result value as display text."""
    return default_calculator.format_result(value)


def is_valid_expression(expression: str) -> bool:
    """Return True iff ``evaluate(expression)`` succeeds."""
    return default_calculator.is_valid_expression(expression)


def tokenize(expression: str) -> list["Token"]:
    """Tokenize an expression string; see ``scicalc.lexer.tokenize``."""
    return default_calculator.tokenize(expression)


def parse(expression: str) -> "Expression":
    """Parse an expression string into a tree; see ``scicalc.parser.parse``."""
    return default_calculator.parse(expression)


__all__ = [
    "__version__",
    "evaluate",
    "format_result",
    "is_valid_expression",
    "tokenize",
    "parse",
    "Calculator",
    "EvaluatorConfig",
    "AngleUnit",
    "load_config",
    "ErrorKind",
    "EvalError",
    "UnexpectedCharError",
    "UnexpectedTokenError",
    "UnbalancedParenthesesError",
    "EmptyExpressionError",
    "DivisionByZeroError",
    "DomainError",
    "NonFiniteResultError",
    "NestingTooDeepError",
    "ConfigError",
]
