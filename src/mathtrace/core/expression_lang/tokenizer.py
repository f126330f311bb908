"""
Tokenizer for the mathtrace expression language.

Converts an expression string into a sequence of typed tokens in a single
left-to-right scan.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import StrEnum, auto

from mathtrace.core.errors import ErrorContext, LexError
from mathtrace.core.ir.expressions import CONSTANTS, MathFunction


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    OPERATOR = auto()
    FUNCTION = auto()
    CONSTANT = auto()
    LPAREN = auto()
    RPAREN = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the expression tokenizer.

    ``value`` is set only for NUMBER and CONSTANT tokens.
    """

    kind: TokenKind
    text: str
    pos: int
    value: float | None = None

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, pos={self.pos})"


_FUNCTIONS = frozenset(f.value for f in MathFunction)

_OPERATORS = frozenset("+-*/^")

_PI_GLYPH = "π"

# Numbers are any run of digits and dots; validity is decided by float()
_NUMBER_RE = re.compile(r"[0-9.]+")
_IDENT_RE = re.compile(r"[A-Za-z]+")

_WHITESPACE = " \t\n\r\f\v"


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        LexError: On an unexpected character, an unknown identifier, or a
            malformed numeric literal.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c in _WHITESPACE:
            i += 1
            continue

        if m := _NUMBER_RE.match(source, i):
            text = m.group(0)
            try:
                value = float(text)
            except ValueError:
                raise LexError(f"invalid number: {text}", ErrorContext(source, i)) from None
            if not math.isfinite(value):
                raise LexError(f"number too large: {text}", ErrorContext(source, i))
            tokens.append(Token(TokenKind.NUMBER, text, i, value))
            i = m.end()
            continue

        if m := _IDENT_RE.match(source, i):
            word = m.group(0)
            name = word.lower()
            if name in _FUNCTIONS:
                tokens.append(Token(TokenKind.FUNCTION, name, i))
            elif name in CONSTANTS:
                tokens.append(Token(TokenKind.CONSTANT, name, i, CONSTANTS[name]))
            else:
                raise LexError(f"unknown identifier: {word}", ErrorContext(source, i))
            i = m.end()
            continue

        if c == _PI_GLYPH:
            tokens.append(Token(TokenKind.CONSTANT, c, i, CONSTANTS["pi"]))
            i += 1
            continue

        if c in _OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, c, i))
            i += 1
            continue

        if c == "(":
            tokens.append(Token(TokenKind.LPAREN, c, i))
            i += 1
            continue

        if c == ")":
            tokens.append(Token(TokenKind.RPAREN, c, i))
            i += 1
            continue

        raise LexError(f"unexpected character: {c!r}", ErrorContext(source, i))

    return tokens
