"""Unit tests for scicalc.lexer: tokenization of expression text."""
from __future__ import annotations

import pytest

from scicalc.calculator import Calculator
from scicalc.config import EvaluatorConfig
from scicalc.errors import EvalError, UnexpectedCharError
from scicalc.grammar.tokens import Token, TokenType
from scicalc.lexer.lexer import Lexer, tokenize


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def types_of(tokens: list[Token]) -> list[TokenType]:
    """Return just the token types, excluding EOF."""
    return [t.type for t in tokens if t.type != TokenType.EOF]


def values_of(tokens: list[Token]) -> list[str]:
    """Return just the token values, excluding EOF."""
    return [t.value for t in tokens if t.type != TokenType.EOF]


# ---------------------------------------------------------------------------
# Empty and whitespace-only inputs
# ---------------------------------------------------------------------------


class TestEmptyInputs:
    def test_empty_string_produces_only_eof(self) -> None:
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type is TokenType.EOF

    def test_whitespace_only_produces_only_eof(self) -> None:
        tokens = tokenize("   \t \n ")
        assert types_of(tokens) == []

    def test_eof_is_positioned_at_end_of_source(self) -> None:
        tokens = tokenize("1 + 2  ")
        assert tokens[-1].offset == 7
        assert tokens[-1].end == 7

    def test_lexer_class_matches_module_function(self) -> None:
        assert Lexer("2+3").tokenize() == tokenize("2+3")

    def test_tokens_do_not_depend_on_config(self) -> None:
        calculator = Calculator(EvaluatorConfig(precision=2, angle_unit="radians", max_depth=1))
        assert calculator.tokenize("((sin(30)))") == tokenize("((sin(30)))")


# ---------------------------------------------------------------------------
# Number literals
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("source", [
    "0",
    "42",
    "3.14",
    ".5",
    "5.",
    "1e5",
    "2.5E-7",
    "1e+3",
    "007",
])
def test_number_literal_is_single_token(source: str) -> None:
    tokens = tokenize(source)
    assert types_of(tokens) == [TokenType.NUMBER]
    assert tokens[0].value == source
    assert tokens[0].offset == 0
    assert tokens[0].end == len(source)


class TestNumberEdgeCases:
    def test_second_decimal_point_is_rejected(self) -> None:
        with pytest.raises(UnexpectedCharError) as exc_info:
            tokenize("1.2.3")
        assert exc_info.value.position == 3
        assert exc_info.value.char == "."

    def test_lone_decimal_point_is_rejected(self) -> None:
        with pytest.raises(UnexpectedCharError) as exc_info:
            tokenize("+.")
        assert exc_info.value.position == 1

    def test_minus_is_never_part_of_a_literal(self) -> None:
        assert types_of(tokenize("-5")) == [TokenType.MINUS, TokenType.NUMBER]

    def test_e_without_exponent_digits_is_the_constant(self) -> None:
        tokens = tokenize("2e")
        assert types_of(tokens) == [TokenType.NUMBER, TokenType.IDENT]
        assert values_of(tokens) == ["2", "e"]

    def test_e_followed_by_bare_sign_is_not_an_exponent(self) -> None:
        tokens = tokenize("2e+")
        assert types_of(tokens) == [TokenType.NUMBER, TokenType.IDENT, TokenType.PLUS]

    def test_formatted_exponential_output_relexes_as_one_number(self) -> None:
        tokens = tokenize("1.000000e+15")
        assert types_of(tokens) == [TokenType.NUMBER]


# ---------------------------------------------------------------------------
# Operators and glyphs
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("source, expected_type, expected_value", [
    ("+", TokenType.PLUS, "+"),
    ("-", TokenType.MINUS, "-"),
    ("−", TokenType.MINUS, "-"),
    ("*", TokenType.MULTIPLY, "*"),
    ("×", TokenType.MULTIPLY, "*"),
    ("·", TokenType.MULTIPLY, "*"),
    ("/", TokenType.DIVIDE, "/"),
    ("÷", TokenType.DIVIDE, "/"),
    ("^", TokenType.POWER, "^"),
    ("**", TokenType.POWER, "^"),
    ("²", TokenType.SQUARE, "²"),
    ("³", TokenType.CUBE, "³"),
    ("√", TokenType.ROOT, "√"),
    ("(", TokenType.LPAREN, "("),
    (")", TokenType.RPAREN, ")"),
])
def test_glyph_tokenizes_to_canonical_value(
    source: str, expected_type: TokenType, expected_value: str
) -> None:
    tokens = tokenize(source)
    assert types_of(tokens) == [expected_type]
    assert tokens[0].value == expected_value
    assert tokens[0].end == len(source)


class TestNames:
    @pytest.mark.parametrize("name", ["sin", "cos", "tan", "log", "ln", "sqrt", "recip"])
    def test_function_names(self, name: str) -> None:
        tokens = tokenize(name)
        assert types_of(tokens) == [TokenType.IDENT]
        assert tokens[0].is_function
        assert not tokens[0].is_constant

    @pytest.mark.parametrize("source, value", [("pi", "pi"), ("π", "pi"), ("e", "e")])
    def test_constant_names(self, source: str, value: str) -> None:
        tokens = tokenize(source)
        assert tokens[0].type is TokenType.IDENT
        assert tokens[0].value == value
        assert tokens[0].is_constant

    def test_unknown_name_reports_first_letter(self) -> None:
        with pytest.raises(UnexpectedCharError) as exc_info:
            tokenize("2 + exp(1)")
        assert exc_info.value.position == 4
        assert exc_info.value.char == "e"
        assert "exp" in exc_info.value.message

    def test_names_are_case_sensitive(self) -> None:
        with pytest.raises(UnexpectedCharError):
            tokenize("SIN(30)")

    def test_letter_run_is_not_split(self) -> None:
        # "pie" is not "pi" followed by "e"
        with pytest.raises(UnexpectedCharError):
            tokenize("pie")


# ---------------------------------------------------------------------------
# Invalid characters
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("source, char, position", [
    ("2 $ 3", "$", 2),
    ("1,5", ",", 1),
    ("5!", "!", 1),
    ("[1]", "[", 0),
])
def test_invalid_character_is_reported_with_position(
    source: str, char: str, position: int
) -> None:
    with pytest.raises(UnexpectedCharError) as exc_info:
        tokenize(source)
    assert exc_info.value.char == char
    assert exc_info.value.position == position
    assert isinstance(exc_info.value, EvalError)


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------


class TestPositions:
    def test_offsets_and_ends(self) -> None:
        tokens = tokenize("12 + sin(3)")
        ranges = [(t.offset, t.end) for t in tokens]
        assert ranges == [(0, 2), (3, 4), (5, 8), (8, 9), (9, 10), (10, 11), (11, 11)]

    def test_glyph_offsets_count_characters(self) -> None:
        tokens = tokenize("π×2")
        assert [(t.offset, t.end) for t in tokens] == [(0, 1), (1, 2), (2, 3), (3, 3)]

    def test_mixed_expression(self) -> None:
        tokens = tokenize("(2+3)×4²")
        assert types_of(tokens) == [
            TokenType.LPAREN,
            TokenType.NUMBER,
            TokenType.PLUS,
            TokenType.NUMBER,
            TokenType.RPAREN,
            TokenType.MULTIPLY,
            TokenType.NUMBER,
            TokenType.SQUARE,
        ]


class TestTokenDescribe:
    def test_describe_variants(self) -> None:
        tokens = tokenize("2 + pi")
        assert tokens[0].describe() == "number 2"
        assert tokens[1].describe() == "'+'"
        assert tokens[2].describe() == "name 'pi'"
        assert tokens[3].describe() == "end of expression"
