"""sci-calc evaluator: walks an expression tree and produces a float.

The evaluator is a pure function of the tree and its config.  Every
intermediate value is checked for finiteness, so an overflow surfaces as
``NonFiniteResultError`` at the operation that caused it instead of
leaking ``inf``/``nan`` into later steps (Python's ``math`` functions
reject both).  Python arithmetic exceptions never escape: they are
mapped onto the ``EvalError`` taxonomy.

Chains of left-associative operators (``1+2-3*4...``) are folded
iteratively along the left spine of the tree, so long flat expressions
do not consume interpreter stack.  Recursion depth is bounded by the
nesting the parser allows.

The final result is rounded to ``config.precision`` decimal digits to
absorb representation noise (``0.1+0.2`` gives ``0.3``, ``sin(30)``
gives ``0.5``).
"""
from __future__ import annotations

import math
from collections.abc import Callable

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
    UnaryOpKind,
)
from scicalc.config import DEFAULT_CONFIG, AngleUnit, EvaluatorConfig
from scicalc.errors import DivisionByZeroError, DomainError, NonFiniteResultError

# Beyond this magnitude a float has no fractional digits left to round.
_EXACT_INTEGER_LIMIT = 2.0**53


def round_result(value: float, precision: int = DEFAULT_CONFIG.precision) -> float:
    """Round ``value`` half-up to ``precision`` decimal digits.

    Raises
    ------
    NonFiniteResultError
        If ``value`` is infinite or NaN.
    """
    if not math.isfinite(value):
        raise NonFiniteResultError()
    scale = 10.0**precision
    scaled = value * scale
    if abs(scaled) < _EXACT_INTEGER_LIMIT:
        value = math.floor(scaled + 0.5) / scale
    # normalizes -0.0
    return value if value != 0 else 0.0


def _finite(value: float) -> float:
    if not math.isfinite(value):
        raise NonFiniteResultError()
    return value


class Evaluator:
    """Evaluates expression trees under a fixed ``EvaluatorConfig``.

    Parameters
    ----------
    config:
        Evaluation settings; defaults to ``DEFAULT_CONFIG``.
    """

    def __init__(self, config: EvaluatorConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._functions: dict[str, Callable[[float], float]] = {
            "sin": self._sin,
            "cos": self._cos,
            "tan": self._tan,
            "log": self._log,
            "ln": self._ln,
            "sqrt": self._sqrt,
            "recip": self._recip,
        }

    @property
    def config(self) -> EvaluatorConfig:
        return self._config

    def evaluate(self, expr: Expression) -> float:
        """Evaluate ``expr`` and return the rounded, finite result.

        Raises
        ------
        DivisionByZeroError
            If a divisor evaluates to exactly zero.
        DomainError
            If a function or ``^`` is applied outside its domain.
        NonFiniteResultError
            If any step overflows or produces NaN.
        """
        return round_result(self._eval(expr), self._config.precision)

    # ------------------------------------------------------------------
    # Node dispatch
    # ------------------------------------------------------------------

    def _eval(self, expr: Expression) -> float:
        if isinstance(expr, (NumberLit, Constant)):
            return _finite(expr.value)
        if isinstance(expr, Grouping):
            return self._eval(expr.inner)
        if isinstance(expr, BinaryOpExpr):
            if expr.op is BinOp.POW:
                return self._power(self._eval(expr.left), self._eval(expr.right))
            return self._eval_chain(expr)
        if isinstance(expr, UnaryOpExpr):
            operand = self._eval(expr.operand)
            return -operand if expr.op is UnaryOpKind.NEG else operand
        if isinstance(expr, PostfixExpr):
            return self._power(self._eval(expr.operand), float(expr.op.exponent))
        if isinstance(expr, FunctionCall):
            return self._call(expr.name, self._eval(expr.argument))
        raise TypeError(f"Unknown expression type: {type(expr)}")

    def _eval_chain(self, expr: BinaryOpExpr) -> float:
        """Fold a left-leaning chain of ``+ - * /`` without recursing on the spine."""
        pending: list[tuple[BinOp, Expression]] = []
        node: Expression = expr
        while isinstance(node, BinaryOpExpr) and node.op is not BinOp.POW:
            pending.append((node.op, node.right))
            node = node.left
        value = self._eval(node)
        for op, right in reversed(pending):
            value = self._apply(op, value, self._eval(right))
        return value

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    @staticmethod
    def _apply(op: BinOp, left: float, right: float) -> float:
        if op is BinOp.ADD:
            return _finite(left + right)
        if op is BinOp.SUB:
            return _finite(left - right)
        if op is BinOp.MUL:
            return _finite(left * right)
        if op is BinOp.DIV:
            if right == 0.0:
                raise DivisionByZeroError()
            return _finite(left / right)
        raise ValueError(f"Not a chain operator: {op}")

    @staticmethod
    def _power(base: float, exponent: float) -> float:
        if base < 0 and not exponent.is_integer():
            raise DomainError("^", base)
        if base == 0 and exponent < 0:
            raise DivisionByZeroError("Zero raised to a negative power")
        try:
            return _finite(math.pow(base, exponent))
        except OverflowError:
            raise NonFiniteResultError() from None

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def _call(self, name: str, argument: float) -> float:
        try:
            function = self._functions[name]
        except KeyError:
            raise ValueError(f"Unknown function: {name!r}") from None
        return _finite(function(argument))

    def _to_radians(self, angle: float) -> float:
        if self._config.angle_unit is AngleUnit.DEGREES:
            return math.radians(angle)
        return angle

    def _sin(self, angle: float) -> float:
        return math.sin(self._to_radians(angle))

    def _cos(self, angle: float) -> float:
        return math.cos(self._to_radians(angle))

    def _tan(self, angle: float) -> float:
        # tan is undefined at odd multiples of 90 degrees
        if self._config.angle_unit is AngleUnit.DEGREES and abs(math.fmod(angle, 180.0)) == 90.0:
            raise DomainError("tan", angle)
        return math.tan(self._to_radians(angle))

    @staticmethod
    def _log(value: float) -> float:
        if value <= 0:
            raise DomainError("log", value)
        return math.log10(value)

    @staticmethod
    def _ln(value: float) -> float:
        if value <= 0:
            raise DomainError("ln", value)
        return math.log(value)

    @staticmethod
    def _sqrt(value: float) -> float:
        if value < 0:
            raise DomainError("sqrt", value)
        return math.sqrt(value)

    @staticmethod
    def _recip(value: float) -> float:
        if value == 0:
            raise DomainError("recip", value)
        return 1.0 / value


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def evaluate_tree(expr: Expression, config: EvaluatorConfig | None = None) -> float:
    """Evaluate an expression tree and return the rounded, finite result.

    Example
    -------
    ::

        from scicalc.parser import parse
        from scicalc.evaluator import evaluate_tree
        evaluate_tree(parse("2^3^2"))  # 512.0
    """
    return Evaluator(config).evaluate(expr)
