"""Error taxonomy for sci-calc.

Every failure raised by the lexer, the parser or the evaluator is an
``EvalError`` subclass.  Each error carries an ``ErrorKind``, a stable
machine-readable ``code`` (``"CALC001"`` ...) and, where the failure can
be pinned to the input text, a 0-based ``position``.

No error is fatal: a failed call leaves nothing behind, so the next call
starts from a clean slate.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scicalc.grammar.tokens import Token


class ErrorKind(Enum):
    """Kinds of evaluation failure, valued by their stable error code."""

    UNEXPECTED_CHAR = "CALC001"
    UNEXPECTED_TOKEN = "CALC002"
    UNBALANCED_PARENTHESES = "CALC003"
    EMPTY_EXPRESSION = "CALC004"
    DIVISION_BY_ZERO = "CALC005"
    DOMAIN_ERROR = "CALC006"
    NON_FINITE_RESULT = "CALC007"
    NESTING_TOO_DEEP = "CALC008"


class EvalError(Exception):
    """Base class for all evaluation failures.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    position:
        0-based offset in the expression text, or ``None`` when the
        failure is not tied to a location (e.g. a division by zero).
    """

    kind: ErrorKind

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    @property
    def code(self) -> str:
        """Return the stable error code, e.g. ``"CALC003"``."""
        return self.kind.value

    def __str__(self) -> str:
        if self.position is not None:
            return f"[{self.code}] {self.message} (at position {self.position})"
        return f"[{self.code}] {self.message}"


class UnexpectedCharError(EvalError):
    """Raised by the lexer for a character that cannot start any token."""

    kind = ErrorKind.UNEXPECTED_CHAR

    def __init__(self, char: str, position: int, message: str | None = None) -> None:
        self.char = char
        super().__init__(message or f"Unexpected character {char!r}", position)


class UnexpectedTokenError(EvalError):
    """Raised by the parser when a token does not fit the grammar."""

    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, token: "Token", message: str | None = None) -> None:
        self.token = token
        super().__init__(message or f"Unexpected {token.describe()}", token.offset)


class UnbalancedParenthesesError(EvalError):
    """Raised for a missing ``)`` or a ``)`` with no matching ``(``."""

    kind = ErrorKind.UNBALANCED_PARENTHESES

    def __init__(self, position: int | None = None, message: str = "Unbalanced parentheses") -> None:
        super().__init__(message, position)


class EmptyExpressionError(EvalError):
    """Raised for an empty expression or an empty ``()`` / ``sin()``."""

    kind = ErrorKind.EMPTY_EXPRESSION

    def __init__(self, position: int | None = None, message: str = "Empty expression") -> None:
        super().__init__(message, position)


class DivisionByZeroError(EvalError):
    """Raised when a divisor evaluates to exactly zero."""

    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, message: str = "Division by zero") -> None:
        super().__init__(message)


class DomainError(EvalError):
    """Raised when a function is applied outside its mathematical domain.

    Parameters
    ----------
    function:
        The function or operator name, e.g. ``"sqrt"`` or ``"^"``.
    value:
        The offending input value.
    """

    kind = ErrorKind.DOMAIN_ERROR

    def __init__(self, function: str, value: float) -> None:
        self.function = function
        self.value = value
        super().__init__(f"{function} is undefined for {value!r}")


class NonFiniteResultError(EvalError):
    """Raised when a computation overflows or produces NaN."""

    kind = ErrorKind.NON_FINITE_RESULT

    def __init__(self, message: str = "Result is not a finite number") -> None:
        super().__init__(message)


class NestingTooDeepError(EvalError):
    """Raised when parentheses or function calls nest beyond the configured limit."""

    kind = ErrorKind.NESTING_TOO_DEEP

    def __init__(self, limit: int, position: int | None = None) -> None:
        self.limit = limit
        super().__init__(f"Expression nests deeper than {limit} levels", position)


class ConfigError(ValueError):
    """Raised when an ``EvaluatorConfig`` is given invalid settings."""


__all__ = [
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
