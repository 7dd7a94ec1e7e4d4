"""Calculator facade: the lexer → parser → evaluator pipeline behind one object.

The top-level ``scicalc`` module exposes ``evaluate``, ``format_result``
and ``is_valid_expression`` as module-level functions backed by a default
``Calculator``.  Construct a ``Calculator`` directly to evaluate under a
different ``EvaluatorConfig``.

Example
-------
::

    from scicalc import Calculator, EvaluatorConfig
    calc = Calculator(EvaluatorConfig(angle_unit="radians"))
    calc.evaluate("sin(pi / 2)")   # 1.0

A ``Calculator`` keeps nothing between calls except its immutable config,
so one instance can be shared freely between threads.
"""
from __future__ import annotations

import logging

from scicalc.ast.nodes import Expression, depth
from scicalc.config import DEFAULT_CONFIG, EvaluatorConfig
from scicalc.errors import EvalError
from scicalc.evaluator.evaluator import Evaluator
from scicalc.formatter.formatter import format_result
from scicalc.grammar.tokens import Token
from scicalc.lexer.lexer import tokenize
from scicalc.parser.parser import Parser

logger = logging.getLogger(__name__)


class Calculator:
    """Stateless expression calculator.

    Parameters
    ----------
    config:
        Evaluation settings.  Defaults to 12-digit rounding, degree
        angles and a nesting limit of 64.
    """

    def __init__(self, config: EvaluatorConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._evaluator = Evaluator(self._config)

    def __repr__(self) -> str:
        return f"Calculator({self._config!r})"

    @property
    def config(self) -> EvaluatorConfig:
        """The settings this calculator evaluates under."""
        return self._config

    def tokenize(self, expression: str) -> list[Token]:
        """Return the token list for ``expression``."""
        return tokenize(expression)

    def parse(self, expression: str) -> Expression:
        """Return the expression tree for ``expression``."""
        tree = Parser(tokenize(expression), self._config).parse()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Parsed %r into a tree of depth %d", expression, depth(tree))
        return tree

    def evaluate(self, expression: str) -> float:
        """Evaluate ``expression`` and return a finite, rounded float.

        Parameters
        ----------
        expression:
            Expression text, e.g. ``"2 + 3 × 4"``.

        Returns
        -------
        float
            The result, rounded to ``config.precision`` decimal digits.

        Raises
        ------
        EvalError
            The specific failure from whichever stage rejected the input.
        """
        try:
            result = self._evaluator.evaluate(self.parse(expression))
        except EvalError as exc:
            logger.debug("Evaluation of %r failed: %s", expression, exc)
            raise
        logger.debug("Evaluated %r -> %r", expression, result)
        return result

    def format_result(self, value: float) -> str:
        """Render ``value`` for display; see ``scicalc.formatter.format_result``."""
        return format_result(value)

    def evaluate_to_text(self, expression: str) -> str:
        """Evaluate ``expression`` and return the formatted result."""
        return format_result(self.evaluate(expression))

    def is_valid_expression(self, expression: str) -> bool:
        """Return True if ``expression`` evaluates without error."""
        try:
            self.evaluate(expression)
        except EvalError:
            return False
        return True


default_calculator = Calculator()
