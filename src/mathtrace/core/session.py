"""
Calculator keypad state.

Holds the expression being typed plus the outcome of the last ``equals()``.
Each outcome fully replaces the previous one: a fresh error never sits next
to a stale result, and a fresh result clears any earlier error.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mathtrace.core.errors import MathTraceError
from mathtrace.core.expression_lang.engine import EvaluationResult, evaluate
from mathtrace.core.manifest import MathTraceConfig


@dataclass
class CalculatorSession:
    """Mutable display state for one interactive calculator."""

    config: MathTraceConfig = field(default_factory=MathTraceConfig)
    expression: str = ""
    result: EvaluationResult | None = None
    error: MathTraceError | None = None

    def append(self, text: str) -> None:
        """Append keypad input, e.g. ``"7"``, ``"sqrt("`` or ``"π"``."""
        self.expression += text
        self.error = None

    def backspace(self) -> None:
        self.expression = self.expression[:-1]
        self.error = None

    def clear(self) -> None:
        self.expression = ""
        self.result = None
        self.error = None

    def equals(self) -> EvaluationResult | None:
        """Evaluate the current expression.

        An empty expression resets the display to ``0``. On failure the
        error is stored and the previous result dropped; nothing is raised.
        """
        if not self.expression.strip():
            self.result = None
            self.error = None
            return None
        try:
            outcome = evaluate(self.expression, self.config)
        except MathTraceError as e:
            self.result = None
            self.error = e
            return None
        self.result = outcome
        self.error = None
        return outcome

    @property
    def display(self) -> str:
        """Second display line: error message, result, or ``0``."""
        if self.error is not None:
            return self.error.message
        if self.result is not None:
            return self.result.display
        return "0"
