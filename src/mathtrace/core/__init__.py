"""Core mathtrace functionality: expression tree, tokenizer, parser, evaluator, configuration."""

from . import ir
from .errors import (
    ErrorContext,
    EvalError,
    LexError,
    MathTraceError,
    ParseError,
)
from .manifest import ConfigError, MathTraceConfig, load_config, resolve_config
from .session import CalculatorSession

__all__ = [
    "ir",
    "MathTraceError",
    "LexError",
    "ParseError",
    "EvalError",
    "ErrorContext",
    "ConfigError",
    "MathTraceConfig",
    "load_config",
    "resolve_config",
    "CalculatorSession",
]
