"""
Single entry point for hosts: source text in, value and trace out.

Every call builds its own tokenizer output, parser and trace recorder, so
calls share no state and identical input always yields an identical
result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mathtrace.core.errors import MathTraceError, ParseError
from mathtrace.core.expression_lang.evaluator import TraceRecorder, evaluate_expr
from mathtrace.core.expression_lang.formatting import format_number
from mathtrace.core.expression_lang.parser import parse_tokens
from mathtrace.core.expression_lang.tokenizer import Token, tokenize
from mathtrace.core.manifest import MathTraceConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of a successful evaluation."""

    source: str
    value: float
    trace: tuple[str, ...]
    tokens: tuple[Token, ...]
    precision: int = 12

    @property
    def display(self) -> str:
        """The value rendered with the display formatting rule."""
        return format_number(self.value, self.precision)


def evaluate(source: str, config: MathTraceConfig | None = None) -> EvaluationResult:
    """Tokenize, parse and evaluate an expression.

    Args:
        source: Expression string, e.g. ``"sqrt(144) + 3^2"``.
        config: Limits and display precision; defaults apply when omitted.

    Returns:
        EvaluationResult with the finite value, trace lines and tokens.

    Raises:
        LexError: Unknown character or identifier, malformed number.
        ParseError: Input does not match the grammar (including empty input).
        EvalError: Division by zero, domain error or overflow.
    """
    config = config or MathTraceConfig()
    precision = config.display.precision

    try:
        tokens = tokenize(source)
        expr = parse_tokens(
            tokens,
            source,
            max_depth=config.engine.max_depth,
            max_tokens=config.engine.max_tokens,
        )
        recorder = TraceRecorder(precision)
        value = evaluate_expr(expr, source=source, trace=recorder)
    except RecursionError:
        # Only reachable when max_depth is set beyond what the interpreter stack holds
        logger.debug("Rejected %r: recursion limit reached", source)
        raise ParseError("expression too deeply nested") from None
    except MathTraceError as e:
        logger.debug("Rejected %r: %s: %s", source, e.kind, e.message)
        raise

    logger.debug("Evaluated %r -> %r (%d steps)", source, value, len(recorder))
    return EvaluationResult(
        source=source,
        value=value,
        trace=recorder.steps,
        tokens=tuple(tokens),
        precision=precision,
    )
