"""
Error types for mathtrace tokenizing, parsing, and evaluation.
"""

from dataclasses import dataclass
from typing import Optional, TypeVar


class MathTraceError(Exception):
    """Base exception for all mathtrace expression errors."""

    kind = "MathTraceError"

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(message)

    @property
    def pos(self) -> int | None:
        """0-based source offset of the offending character or token, if known."""
        return self.context.pos if self.context else None

    def describe(self) -> str:
        """Format error message with a caret snippet if context is available."""
        if self.context:
            return f"{self.kind}: {self.message}\n{self.context.format()}"
        return f"{self.kind}: {self.message}"


class LexError(MathTraceError):
    """
    Raised when the source string cannot be tokenized.

    Examples:
    - Unexpected character
    - Unknown identifier
    - Malformed numeric literal (``1.2.3``)
    """

    kind = "LexError"


class ParseError(MathTraceError):
    """
    Raised when the token stream does not match the grammar.

    Examples:
    - Missing parentheses
    - Trailing tokens
    - Unexpected end of input
    - Expression nested too deeply
    """

    kind = "ParseError"


class EvalError(MathTraceError):
    """
    Raised while evaluating a structurally valid expression.

    Examples:
    - Division by zero
    - Square root of a negative number
    - Math domain errors and overflow
    """

    kind = "EvalError"


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        source: The expression text that was being processed
        pos: 0-based offset into ``source``
    """

    source: str
    pos: int

    def format(self) -> str:
        """
        Format the source with an error marker under the offending position.

        Returns:
            Two lines: the expression and a ``^`` marker, e.g.::

                2 + $
                    ^
        """
        line = self.source.replace("\n", " ").replace("\t", " ")
        marker_pos = min(max(self.pos, 0), len(line))
        return f"  {line}\n  {' ' * marker_pos}^"


_E = TypeVar("_E", bound=MathTraceError)


def make_error(
    error_cls: type[_E],
    message: str,
    source: str | None = None,
    pos: int | None = None,
) -> _E:
    """
    Helper to create an error with optional source context.

    Args:
        error_cls: LexError, ParseError or EvalError
        message: Error description
        source: Optional expression text
        pos: Optional 0-based offset

    Returns:
        Error instance with context attached if location provided
    """
    if source is not None and pos is not None:
        return error_cls(message, ErrorContext(source=source, pos=pos))
    return error_cls(message)
