"""
Recursive descent parser for the mathtrace expression language.

Grammar (precedence low to high):
    expression → addsub
    addsub     → muldiv (("+"|"-") muldiv)*
    muldiv     → unary (("*"|"/") unary)*
    unary      → ("+"|"-") unary | power
    power      → primary ("^" unary)?
    primary    → NUMBER | CONSTANT | FUNCTION "(" expression ")" | "(" expression ")"

``^`` is right-associative because its right operand re-enters ``unary``
and therefore ``power``; a leading sign wraps the whole power, so ``-2^2``
is ``-(2^2)``.

The nesting limit counts parentheses, calls, signs and exponents, plus one
level per chained ``+ - * /`` operand.
"""

from __future__ import annotations

from mathtrace.core.errors import ErrorContext, ParseError
from mathtrace.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from mathtrace.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Constant,
    Expr,
    FuncCall,
    MathFunction,
    Number,
    UnaryExpr,
    UnaryOp,
)

DEFAULT_MAX_DEPTH = 64
DEFAULT_MAX_TOKENS = 256


class _Parser:
    """Recursive descent parser for expressions."""

    def __init__(self, tokens: list[Token], source: str, max_depth: int) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def match_operator(self, *ops: str) -> Token | None:
        tok = self.current
        if tok is not None and tok.kind == TokenKind.OPERATOR and tok.text in ops:
            return self.advance()
        return None

    def error(self, message: str, tok: Token | None = None) -> ParseError:
        pos = tok.pos if tok is not None else len(self.source)
        return ParseError(message, ErrorContext(self.source, pos))

    def enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise self.error("expression too deeply nested", self.current)

    def leave(self) -> None:
        self.depth -= 1

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """Top-level: addsub."""
        self.enter()
        try:
            return self.parse_addsub()
        finally:
            self.leave()

    def parse_addsub(self) -> Expr:
        """muldiv (('+' | '-') muldiv)*"""
        left = self.parse_muldiv()
        chained = 0
        try:
            while tok := self.match_operator("+", "-"):
                chained += 1
                self.enter()
                right = self.parse_muldiv()
                left = BinaryExpr(op=BinaryOp(tok.text), left=left, right=right, pos=tok.pos)
        finally:
            self.depth -= chained
        return left

    def parse_muldiv(self) -> Expr:
        """unary (('*' | '/') unary)*"""
        left = self.parse_unary()
        chained = 0
        try:
            while tok := self.match_operator("*", "/"):
                chained += 1
                self.enter()
                right = self.parse_unary()
                left = BinaryExpr(op=BinaryOp(tok.text), left=left, right=right, pos=tok.pos)
        finally:
            self.depth -= chained
        return left

    def parse_unary(self) -> Expr:
        """('+' | '-') unary | power"""
        tok = self.match_operator("+", "-")
        if tok is None:
            return self.parse_power()
        self.enter()
        try:
            operand = self.parse_unary()
        finally:
            self.leave()
        return UnaryExpr(op=UnaryOp(tok.text), operand=operand, pos=tok.pos)

    def parse_power(self) -> Expr:
        """primary ('^' unary)?"""
        base = self.parse_primary()
        tok = self.match_operator("^")
        if tok is None:
            return base
        self.enter()
        try:
            exponent = self.parse_unary()
        finally:
            self.leave()
        return BinaryExpr(op=BinaryOp.POW, left=base, right=exponent, pos=tok.pos)

    def parse_primary(self) -> Expr:
        """NUMBER | CONSTANT | FUNCTION '(' expression ')' | '(' expression ')'"""
        tok = self.current
        if tok is None:
            raise self.error("unexpected end of expression")

        if tok.kind == TokenKind.NUMBER and tok.value is not None:
            self.advance()
            return Number(value=tok.value, text=tok.text, pos=tok.pos)

        if tok.kind == TokenKind.CONSTANT and tok.value is not None:
            self.advance()
            return Constant(name=tok.text, value=tok.value, pos=tok.pos)

        if tok.kind == TokenKind.FUNCTION:
            return self._parse_func_call()

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            expr = self.parse_expression()
            self._expect_rparen()
            return expr

        raise self.error(f"unexpected token: {tok.text!r}", tok)

    def _parse_func_call(self) -> FuncCall:
        """FUNCTION '(' expression ')'"""
        name_tok = self.advance()
        lparen = self.current
        if lparen is None or lparen.kind != TokenKind.LPAREN:
            raise self.error(f"expected '(' after {name_tok.text}", lparen)
        self.advance()
        arg = self.parse_expression()
        self._expect_rparen()
        return FuncCall(name=MathFunction(name_tok.text), arg=arg, pos=name_tok.pos)

    def _expect_rparen(self) -> None:
        tok = self.current
        if tok is None or tok.kind != TokenKind.RPAREN:
            raise self.error("expected ')'", tok)
        self.advance()


def parse_tokens(
    tokens: list[Token],
    source: str = "",
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> Expr:
    """Parse a token list into an expression tree.

    Args:
        tokens: Output of :func:`tokenize`.
        source: Original text, used only to position error markers.
        max_depth: Maximum nesting of parentheses, function calls, signs,
            exponents and chained operands.
        max_tokens: Maximum number of tokens accepted.

    Raises:
        ParseError: If the tokens do not form a single valid expression.
    """
    if not tokens:
        raise ParseError("empty expression")
    if len(tokens) > max_tokens:
        raise ParseError(
            "expression too long", ErrorContext(source, tokens[max_tokens].pos)
        )

    parser = _Parser(tokens, source, max_depth)
    expr = parser.parse_expression()

    # Ensure all tokens consumed
    if parser.current is not None:
        raise parser.error("unexpected tokens after expression", parser.current)

    return expr


def parse_expr(
    source: str,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> Expr:
    """Parse an expression string into an expression tree.

    Args:
        source: Expression string (e.g., "sqrt(144) + 3^2")

    Returns:
        Parsed expression tree.

    Raises:
        LexError: If tokenization fails.
        ParseError: If the expression is invalid.
    """
    return parse_tokens(
        tokenize(source), source, max_depth=max_depth, max_tokens=max_tokens
    )
