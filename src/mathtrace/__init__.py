"""
mathtrace - math expression evaluator with a step-by-step derivation trace.

    >>> from mathtrace import evaluate
    >>> evaluate("(1 + 2) * (3 + 4)").trace
    ('1 + 2 = 3', '3 + 4 = 7', '3 * 7 = 21')
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import EvalError, LexError, MathTraceError, ParseError
from .core.expression_lang import EvaluationResult, evaluate, format_number, tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "EvaluationResult",
    "EvalError",
    "LexError",
    "MathTraceError",
    "ParseError",
    "evaluate",
    "format_number",
    "tokenize",
]
