"""sci-calc recursive-descent parser.

Converts a flat list of ``Token`` objects into an expression tree.

Expression parsing follows the usual precedence-climbing layout, from
lowest to highest binding:

    sum     := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('-' | '+') unary | power
    power   := postfix ('^' power)?
    postfix := primary ('²' | '³')*
    primary := NUMBER | CONSTANT | '(' sum ')' | FUNCTION '(' sum ')'
             | '√' primary | ('-' | '+') primary

``+``, ``-``, ``*`` and ``/`` are left associative; ``^`` is right
associative, so ``2^3^2`` is ``2^(3^2)``.  A leading sign binds looser
than ``^`` (``-2^2`` is ``-(2^2)``), while a sign directly after ``^``
applies to the exponent only (``2^-1``).

Implicit multiplication is not part of the grammar: ``2π`` and ``2(3)``
are rejected with ``UnexpectedTokenError``.

Unlike a multi-error language parser there is no recovery: the first
problem raises and the whole parse is abandoned.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from scicalc.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    Constant,
    Expression,
    FunctionCall,
    Grouping,
    NumberLit,
    PostfixExpr,
    PostfixKind,
    Span,
    UnaryOpExpr,
    UnaryOpKind,
)
from scicalc.config import DEFAULT_CONFIG, EvaluatorConfig
from scicalc.errors import (
    EmptyExpressionError,
    NestingTooDeepError,
    UnbalancedParenthesesError,
    UnexpectedTokenError,
)
from scicalc.grammar.tokens import CONSTANTS, Token, TokenType
from scicalc.lexer.lexer import tokenize

_T = TypeVar("_T")

_BINOP_MAP: dict[TokenType, BinOp] = {
    TokenType.PLUS: BinOp.ADD,
    TokenType.MINUS: BinOp.SUB,
    TokenType.MULTIPLY: BinOp.MUL,
    TokenType.DIVIDE: BinOp.DIV,
    TokenType.POWER: BinOp.POW,
}
_UNARY_MAP: dict[TokenType, UnaryOpKind] = {
    TokenType.MINUS: UnaryOpKind.NEG,
    TokenType.PLUS: UnaryOpKind.POS,
}
_POSTFIX_MAP: dict[TokenType, PostfixKind] = {
    TokenType.SQUARE: PostfixKind.SQUARE,
    TokenType.CUBE: PostfixKind.CUBE,
}


class Parser:
    """Recursive descent parser that produces an expression tree from tokens.

    Parameters
    ----------
    tokens:
        The flat token list produced by the lexer.  Must end with the
        terminal ``EOF`` token.
    config:
        Evaluator settings; only ``max_depth`` is used here.
    """

    def __init__(self, tokens: list[Token], config: EvaluatorConfig | None = None) -> None:
        if not tokens or tokens[-1].type is not TokenType.EOF:
            end = tokens[-1].end if tokens else 0
            tokens = [*tokens, Token(TokenType.EOF, "", end, end)]
        self._tokens: list[Token] = tokens
        self._pos: int = 0
        self._nesting: int = 0
        self._open_parens: list[Token] = []
        self._max_depth: int = (config or DEFAULT_CONFIG).max_depth

    # ------------------------------------------------------------------
    # Navigation helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current token without consuming it."""
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        tok = self._current()
        if tok.type is not TokenType.EOF:
            self._pos += 1
        return tok

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types."""
        return self._current().type in types

    def _nested(self, at: Token, parse: Callable[[], _T]) -> _T:
        """Run ``parse`` one nesting level deeper, enforcing ``max_depth``."""
        self._nesting += 1
        try:
            if self._nesting > self._max_depth:
                raise NestingTooDeepError(self._max_depth, at.offset)
            return parse()
        finally:
            self._nesting -= 1

    # ------------------------------------------------------------------
    # Top-level parse
    # ------------------------------------------------------------------

    def parse(self) -> Expression:
        """Parse the whole token stream and return the root expression.

        Raises
        ------
        EmptyExpressionError
            If there are no tokens besides ``EOF``.
        UnbalancedParenthesesError
            If a ``(`` is never closed or a ``)`` has no opening partner.
        UnexpectedTokenError
            For any other token that does not fit the grammar.
        NestingTooDeepError
            If the expression nests deeper than ``max_depth``.
        """
        if self._check(TokenType.EOF):
            raise EmptyExpressionError(position=self._current().offset)
        expr = self._parse_sum()
        tok = self._current()
        if tok.type is TokenType.RPAREN:
            raise UnbalancedParenthesesError(tok.offset, "Unmatched ')'")
        if tok.type is not TokenType.EOF:
            raise UnexpectedTokenError(
                tok, f"Expected an operator before {tok.describe()}"
            )
        return expr

    # ------------------------------------------------------------------
    # Binary levels
    # ------------------------------------------------------------------

    def _parse_sum(self) -> Expression:
        """Parse: ``term (('+' | '-') term)*``"""
        left = self._parse_term()
        while self._check(TokenType.PLUS, TokenType.MINUS):
            op_tok = self._advance()
            right = self._parse_term()
            left = BinaryOpExpr(
                op=_BINOP_MAP[op_tok.type],
                left=left,
                right=right,
                span=left.span.merge(right.span),
            )
        return left

    def _parse_term(self) -> Expression:
        """Parse: ``unary (('*' | '/') unary)*``"""
        left = self._parse_unary()
        while self._check(TokenType.MULTIPLY, TokenType.DIVIDE):
            op_tok = self._advance()
            right = self._parse_unary()
            left = BinaryOpExpr(
                op=_BINOP_MAP[op_tok.type],
                left=left,
                right=right,
                span=left.span.merge(right.span),
            )
        return left

    def _parse_unary(self) -> Expression:
        """Parse: ``('-' | '+') unary | power``"""
        if self._check(TokenType.MINUS, TokenType.PLUS):
            op_tok = self._advance()
            operand = self._nested(op_tok, self._parse_unary)
            return UnaryOpExpr(
                op=_UNARY_MAP[op_tok.type],
                operand=operand,
                span=Span(op_tok.offset, operand.span.end),
            )
        return self._parse_power()

    def _parse_power(self) -> Expression:
        """Parse: ``postfix ('^' power)?`` (right associative)"""
        base = self._parse_postfix()
        if self._check(TokenType.POWER):
            op_tok = self._advance()
            exponent = self._nested(op_tok, self._parse_power)
            return BinaryOpExpr(
                op=BinOp.POW,
                left=base,
                right=exponent,
                span=base.span.merge(exponent.span),
            )
        return base

    def _parse_postfix(self) -> Expression:
        """Parse: ``primary ('²' | '³')*``

        Each marker wraps the operand once more, so a run of markers counts
        toward ``max_depth`` like any other nesting.
        """
        operand = self._parse_primary()
        markers = 0
        while self._check(TokenType.SQUARE, TokenType.CUBE):
            tok = self._advance()
            markers += 1
            if self._nesting + markers > self._max_depth:
                raise NestingTooDeepError(self._max_depth, tok.offset)
            operand = PostfixExpr(
                op=_POSTFIX_MAP[tok.type],
                operand=operand,
                span=Span(operand.span.start, tok.end),
            )
        return operand

    # ------------------------------------------------------------------
    # Primary expressions
    # ------------------------------------------------------------------

    def _parse_primary(self) -> Expression:
        """Parse a number, constant, group, function call or signed primary."""
        tok = self._current()

        if tok.type is TokenType.NUMBER:
            self._advance()
            return NumberLit(value=float(tok.value), span=Span(tok.offset, tok.end))

        if tok.type is TokenType.LPAREN:
            self._advance()
            inner, close_tok = self._parse_parenthesized(tok, "Empty parentheses")
            return Grouping(inner=inner, span=Span(tok.offset, close_tok.end))

        if tok.type is TokenType.IDENT:
            return self._parse_name()

        if tok.type is TokenType.ROOT:
            self._advance()
            operand = self._nested(tok, self._parse_primary)
            return FunctionCall(
                name="sqrt",
                argument=operand,
                span=Span(tok.offset, operand.span.end),
            )

        if tok.type in _UNARY_MAP:
            self._advance()
            operand = self._nested(tok, self._parse_primary)
            return UnaryOpExpr(
                op=_UNARY_MAP[tok.type],
                operand=operand,
                span=Span(tok.offset, operand.span.end),
            )

        if tok.type is TokenType.EOF:
            if self._open_parens:
                open_tok = self._open_parens[-1]
                raise UnbalancedParenthesesError(
                    open_tok.offset, f"Missing ')' for '(' at position {open_tok.offset}"
                )
            raise UnexpectedTokenError(tok, "Expression ends where an operand is expected")
        raise UnexpectedTokenError(tok, f"Expected an operand, got {tok.describe()}")

    def _parse_name(self) -> Expression:
        """Parse a constant reference or a ``name '(' sum ')'`` call.

        An identifier followed by ``(`` is a call; anything else is a
        constant reference.
        """
        name_tok = self._advance()
        name = name_tok.value

        if self._check(TokenType.LPAREN):
            open_tok = self._advance()
            if name_tok.is_constant:
                raise UnexpectedTokenError(
                    open_tok, f"Constant {name!r} cannot be called like a function"
                )
            argument, close_tok = self._parse_parenthesized(
                open_tok, f"{name}() needs an argument"
            )
            return FunctionCall(
                name=name,
                argument=argument,
                span=Span(name_tok.offset, close_tok.end),
            )

        if name_tok.is_function:
            raise UnexpectedTokenError(
                self._current(), f"Expected '(' after function {name!r}"
            )
        return Constant(
            name=name,
            value=CONSTANTS[name],
            span=Span(name_tok.offset, name_tok.end),
        )

    def _parse_parenthesized(
        self, open_tok: Token, empty_message: str
    ) -> tuple[Expression, Token]:
        """Parse ``sum ')'`` after an already consumed ``(``."""
        if self._check(TokenType.RPAREN):
            raise EmptyExpressionError(open_tok.offset, empty_message)
        self._open_parens.append(open_tok)
        try:
            inner = self._nested(open_tok, self._parse_sum)
        finally:
            self._open_parens.pop()
        close_tok = self._current()
        if close_tok.type is TokenType.RPAREN:
            self._advance()
            return inner, close_tok
        if close_tok.type is TokenType.EOF:
            raise UnbalancedParenthesesError(
                open_tok.offset, f"Missing ')' for '(' at position {open_tok.offset}"
            )
        raise UnexpectedTokenError(
            close_tok, f"Expected an operator or ')', got {close_tok.describe()}"
        )


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def parse(
    source: str | list[Token], config: EvaluatorConfig | None = None
) -> Expression:
    """Parse an expression string (or token list) into an expression tree.

    Parameters
    ----------
    source:
        Expression text, or a token list already produced by ``tokenize``.
    config:
        Optional settings; ``max_depth`` bounds nesting.

    Returns
    -------
    Expression
        The root node of the parsed tree.

    Raises
    ------
    EvalError
        ``UnexpectedCharError`` from the lexer, or any parser error.
    """
    tokens = tokenize(source) if isinstance(source, str) else source
    return Parser(tokens, config).parse()
