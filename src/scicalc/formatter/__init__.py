"""sci-calc formatter module.

Exports ``format_result``, ``ExpressionFormatter``, ``format_expression``
and ``detokenize``.
"""
from __future__ import annotations

from scicalc.formatter.formatter import (
    ExpressionFormatter,
    detokenize,
    format_expression,
    format_result,
)

__all__ = ["ExpressionFormatter", "format_expression", "format_result", "detokenize"]
