"""Unit tests for scicalc.formatter: result text, tree text and token text."""
from __future__ import annotations

import math

import pytest

from scicalc.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    Expression,
    NumberLit,
    Span,
    UnaryOpExpr,
    UnaryOpKind,
)
from scicalc.calculator import Calculator
from scicalc.errors import NonFiniteResultError
from scicalc.formatter.formatter import (
    ExpressionFormatter,
    detokenize,
    format_expression,
    format_result,
)
from scicalc.lexer import tokenize
from scicalc.parser import parse


def num(value: float) -> NumberLit:
    return NumberLit(value=value, span=Span.unknown())


def binop(op: BinOp, left: Expression, right: Expression) -> BinaryOpExpr:
    return BinaryOpExpr(op=op, left=left, right=right, span=Span.unknown())


# ---------------------------------------------------------------------------
# format_result
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value, expected", [
    (14.0, "14"),
    (0.0, "0"),
    (-0.0, "0"),
    (0.3, "0.3"),
    (-2.5, "-2.5"),
    (0.00001, "0.00001"),
    (0.000015, "0.000015"),
    (1e-6, "0.000001"),
    (123456789012345.0, "123456789012345"),
    (1e15, "1.000000e+15"),
    (1.5e20, "1.500000e+20"),
    (-1e16, "-1.000000e+16"),
    (1e-7, "1.000000e-07"),
    (-2.5e-9, "-2.500000e-09"),
])
def test_format_result(value: float, expected: str) -> None:
    assert format_result(value) == expected


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_format_result_rejects_non_finite(value: float) -> None:
    with pytest.raises(NonFiniteResultError):
        format_result(value)


@pytest.mark.parametrize("source", [
    "2+3×4",
    "0.1+0.2",
    "1÷3",
    "-1÷7",
    "-7.25",
    "sqrt(2)",
    "10^20",
    "3×10^15",
    "1e-9",
    "pi×1000",
])
def test_formatted_result_evaluates_to_same_value(source: str, calculator: Calculator) -> None:
    value = calculator.evaluate(source)
    assert calculator.evaluate(calculator.format_result(value)) == value


def test_evaluate_to_text(calculator: Calculator) -> None:
    assert calculator.evaluate_to_text("1e20×3") == "3.000000e+20"
    assert calculator.evaluate_to_text("(2+3)×4") == "20"


# ---------------------------------------------------------------------------
# format_expression
# ---------------------------------------------------------------------------


class TestFormatExpression:
    @pytest.mark.parametrize("source, expected", [
        ("2+3×4", "2 + 3 * 4"),
        ("(2+3)×4", "(2 + 3) * 4"),
        ("2^3^2", "2 ^ 3 ^ 2"),
        ("-2^2", "-2 ^ 2"),
        ("2^-1", "2 ^ (-1)"),
        ("sin(30)+π", "sin(30) + pi"),
        ("3²", "3²"),
        ("(-2)²", "(-2)²"),
        ("√9", "sqrt(9)"),
        ("1e20", "1e+20"),
        ("0.5", "0.5"),
        ("8÷4÷2", "8 / 4 / 2"),
    ])
    def test_canonical_text(self, source: str, expected: str) -> None:
        assert format_expression(parse(source)) == expected

    def test_glyphs(self) -> None:
        assert format_expression(parse("(2+3)*4/pi"), glyphs=True) == "(2 + 3) × 4 ÷ π"

    def test_right_nested_subtraction_gets_parentheses(self) -> None:
        tree = binop(BinOp.SUB, num(1), binop(BinOp.SUB, num(2), num(3)))
        assert format_expression(tree) == "1 - (2 - 3)"

    def test_left_nested_power_gets_parentheses(self) -> None:
        tree = binop(BinOp.POW, binop(BinOp.POW, num(2), num(3)), num(2))
        assert format_expression(tree) == "(2 ^ 3) ^ 2"

    def test_sum_inside_product_gets_parentheses(self) -> None:
        tree = binop(BinOp.MUL, binop(BinOp.ADD, num(1), num(2)), num(3))
        assert format_expression(tree) == "(1 + 2) * 3"

    def test_negative_literal_base_gets_parentheses(self) -> None:
        tree = binop(BinOp.POW, num(-2), num(2))
        assert format_expression(tree) == "(-2) ^ 2"

    def test_unary_of_sum(self) -> None:
        tree = UnaryOpExpr(
            op=UnaryOpKind.NEG, operand=binop(BinOp.ADD, num(1), num(2)), span=Span.unknown()
        )
        assert format_expression(tree) == "-(1 + 2)"

    def test_long_chain(self) -> None:
        text = format_expression(parse("+".join(["1"] * 3000)))
        assert text.startswith("1 + 1 + 1")
        assert text.count("1") == 3000

    def test_long_mixed_chain(self, calculator: Calculator) -> None:
        source = "1" + "-2×3+4÷2" * 1000
        text = format_expression(parse(source))
        assert text.startswith("1 - 2 * 3 + 4 / 2 - 2 * 3")
        assert calculator.evaluate(text) == calculator.evaluate(source) == -3999.0

    def test_chain_under_power_keeps_parentheses(self) -> None:
        assert format_expression(parse("(1+2+3)^2")) == "(1 + 2 + 3) ^ 2"
        assert format_expression(parse("2×(1+2)-3")) == "2 * (1 + 2) - 3"

    def test_formatter_class(self) -> None:
        assert ExpressionFormatter().format(parse("1+2")) == "1 + 2"

    def test_unknown_node_type(self) -> None:
        with pytest.raises(TypeError):
            format_expression("1 + 2")  # type: ignore[arg-type]

    @pytest.mark.parametrize("source", [
        "2+3×4",
        "(2+3)×4",
        "2^-1^2",
        "-2^2",
        "--3",
        "1-(2-3)",
        "sin(30)²+cos(30)²",
        "√16×recip(8)",
        "2×-3÷4",
    ])
    def test_formatted_tree_keeps_value(self, source: str, calculator: Calculator) -> None:
        tree = parse(source)
        assert calculator.evaluate(format_expression(tree)) == calculator.evaluate(source)
        assert calculator.evaluate(format_expression(tree, glyphs=True)) == calculator.evaluate(source)


# ---------------------------------------------------------------------------
# detokenize
# ---------------------------------------------------------------------------


class TestDetokenize:
    @pytest.mark.parametrize("source, expected", [
        ("2×-3", "2 * -3"),
        ("(1+2)÷π", "(1 + 2) / pi"),
        ("3²+√4", "3² + √4"),
        ("-sin(30)", "-sin(30)"),
        ("2**3", "2 ^ 3"),
        ("  1   +2  ", "1 + 2"),
    ])
    def test_canonical_text(self, source: str, expected: str) -> None:
        assert detokenize(tokenize(source)) == expected

    def test_glyphs(self) -> None:
        assert detokenize(tokenize("(1+2)/pi*3"), glyphs=True) == "(1 + 2) ÷ π × 3"

    def test_adjacent_words_stay_separate(self) -> None:
        # invalid to parse, but must not fuse into "2e"
        assert detokenize(tokenize("2 e")) == "2 e"

    def test_empty_token_list(self) -> None:
        assert detokenize(tokenize("")) == ""

    @pytest.mark.parametrize("source", [
        "2+3×4",
        "(2+3)×4",
        "2^3^2",
        "-2^2",
        "sin(30)+cos(60)",
        "1e-3×-2",
        "√9+3³",
    ])
    def test_detokenized_text_keeps_value(self, source: str, calculator: Calculator) -> None:
        text = detokenize(tokenize(source))
        assert calculator.evaluate(text) == calculator.evaluate(source)
        assert [(t.type, t.value) for t in tokenize(text)] == [
            (t.type, t.value) for t in tokenize(source)
        ]
