"""sci-calc evaluator module.

Exports the ``Evaluator`` class, ``evaluate_tree`` and ``round_result``.
"""
from __future__ import annotations

from scicalc.evaluator.evaluator import Evaluator, evaluate_tree, round_result

__all__ = ["Evaluator", "evaluate_tree", "round_result"]
