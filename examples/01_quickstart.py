#!/usr/bin/env python3
"""Example: Quickstart for sci-calc

Minimal working example: evaluate expressions, format results, and
handle evaluation errors.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install sci-calc
"""
from __future__ import annotations

import scicalc

EXPRESSIONS = [
    "2 + 3 × 4",
    "(2 + 3) × 4",
    "2^3^2",
    "sin(30) + cos(60)",
    "√16 + 3²",
    "ln(e) + log(1000)",
    "1e20 × 3",
    "sqrt(-1)",
    "(2 + 3",
    "1 ÷ 0",
]


def main() -> None:
    print(f"sci-calc version: {scicalc.__version__}")

    for expression in EXPRESSIONS:
        try:
            value = scicalc.evaluate(expression)
        except scicalc.EvalError as exc:
            print(f"  {expression:<20} -> error {exc.code}: {exc.message}")
            continue
        print(f"  {expression:<20} = {scicalc.format_result(value)}")

    # Radians instead of degrees
    calc = scicalc.Calculator(scicalc.EvaluatorConfig(angle_unit="radians"))
    print(f"  sin(pi / 2) in radians = {calc.evaluate_to_text('sin(pi / 2)')}")


if __name__ == "__main__":
    main()
