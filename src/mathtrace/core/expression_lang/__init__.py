"""
mathtrace expression language.

Tokenizer, parser and evaluator for arithmetic expressions with
functions, constants and a step-by-step derivation trace.

Usage:
    from mathtrace.core.expression_lang import evaluate

    result = evaluate("sqrt(144) + 3^2")
    # result.value == 21.0
    # result.trace == ("sqrt(144) = 12", "3 ^ 2 = 9", "12 + 9 = 21")
"""

from mathtrace.core.expression_lang.engine import EvaluationResult, evaluate
from mathtrace.core.expression_lang.evaluator import TraceRecorder, evaluate_expr
from mathtrace.core.expression_lang.formatting import format_number
from mathtrace.core.expression_lang.parser import parse_expr, parse_tokens
from mathtrace.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "EvaluationResult",
    "Token",
    "TokenKind",
    "TraceRecorder",
    "evaluate",
    "evaluate_expr",
    "format_number",
    "parse_expr",
    "parse_tokens",
    "tokenize",
]
