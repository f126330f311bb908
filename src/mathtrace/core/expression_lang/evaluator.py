"""
Expression evaluator for the mathtrace expression language.

Walks an expression tree in post-order and computes a float. Pure
evaluation, no I/O. Errors are raised at the operation that fails
(division by zero, domain errors, overflow) rather than being carried
along as NaN or infinity.

An optional :class:`TraceRecorder` receives one line per completed binary
operation, function call and constant substitution, in the order those
reductions complete.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from mathtrace.core.errors import EvalError, make_error
from mathtrace.core.expression_lang.formatting import DEFAULT_PRECISION, format_number
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

_FUNCTIONS: dict[MathFunction, Callable[[float], float]] = {
    MathFunction.SIN: math.sin,
    MathFunction.COS: math.cos,
    MathFunction.TAN: math.tan,
    MathFunction.ASIN: math.asin,
    MathFunction.ACOS: math.acos,
    MathFunction.ATAN: math.atan,
    MathFunction.SQRT: math.sqrt,
    MathFunction.ABS: abs,
    MathFunction.LOG: math.log10,
    MathFunction.LN: math.log,
}


class TraceRecorder:
    """Append-only list of human-readable reduction steps."""

    def __init__(self, precision: int = DEFAULT_PRECISION) -> None:
        self.precision = precision
        self._steps: list[str] = []

    @property
    def steps(self) -> tuple[str, ...]:
        return tuple(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def _fmt(self, value: float) -> str:
        return format_number(value, self.precision)

    def binary(self, op: BinaryOp, left: float, right: float, result: float) -> None:
        self._steps.append(
            f"{self._fmt(left)} {op.value} {self._fmt(right)} = {self._fmt(result)}"
        )

    def call(self, name: MathFunction, arg: float, result: float) -> None:
        self._steps.append(f"{name.value}({self._fmt(arg)}) = {self._fmt(result)}")

    def constant(self, name: str, value: float) -> None:
        self._steps.append(f"{name} = {self._fmt(value)}")


class _Evaluator:
    def __init__(self, source: str | None, trace: TraceRecorder | None) -> None:
        self.source = source
        self.trace = trace

    def fail(self, message: str, pos: int) -> EvalError:
        return make_error(EvalError, message, self.source, pos)

    def interpret(self, expr: Expr) -> float:
        """Dispatch evaluation to the appropriate handler."""
        if isinstance(expr, Number):
            return expr.value

        if isinstance(expr, Constant):
            if self.trace is not None:
                self.trace.constant(expr.name, expr.value)
            return expr.value

        if isinstance(expr, BinaryExpr):
            return self.interpret_binary(expr)

        if isinstance(expr, UnaryExpr):
            operand = self.interpret(expr.operand)
            return -operand if expr.op == UnaryOp.NEG else operand

        if isinstance(expr, FuncCall):
            return self.interpret_call(expr)

        raise EvalError(f"Unknown expression type: {type(expr).__name__}")

    def interpret_binary(self, expr: BinaryExpr) -> float:
        """Evaluate a binary expression."""
        left = self.interpret(expr.left)
        right = self.interpret(expr.right)

        if expr.op == BinaryOp.ADD:
            result = left + right
        elif expr.op == BinaryOp.SUB:
            result = left - right
        elif expr.op == BinaryOp.MUL:
            result = left * right
        elif expr.op == BinaryOp.DIV:
            if right == 0:
                raise self.fail("division by zero", expr.pos)
            result = left / right
        elif expr.op == BinaryOp.POW:
            try:
                result = math.pow(left, right)
            except ValueError:
                raise self.fail("math domain error in ^", expr.pos) from None
            except OverflowError:
                raise self.fail("numeric overflow in ^", expr.pos) from None
        else:
            raise EvalError(f"Unknown binary op: {expr.op}")

        if not math.isfinite(result):
            raise self.fail(f"numeric overflow in {expr.op.value}", expr.pos)

        if self.trace is not None:
            self.trace.binary(expr.op, left, right, result)
        return result

    def interpret_call(self, expr: FuncCall) -> float:
        """Evaluate a built-in function call (closed set)."""
        arg = self.interpret(expr.arg)

        if expr.name == MathFunction.SQRT and arg < 0:
            raise self.fail("cannot take sqrt of negative number", expr.pos)

        func = _FUNCTIONS.get(expr.name)
        if func is None:
            raise EvalError(f"Unknown function: {expr.name}()")
        try:
            result = func(arg)
        except ValueError:
            raise self.fail(f"math domain error in {expr.name.value}", expr.pos) from None

        if not math.isfinite(result):
            raise self.fail(f"numeric overflow in {expr.name.value}", expr.pos)

        if self.trace is not None:
            self.trace.call(expr.name, arg, result)
        return result


def evaluate_expr(
    expr: Expr,
    *,
    source: str | None = None,
    trace: TraceRecorder | None = None,
) -> float:
    """Evaluate an expression tree.

    This is a tree-walking interpreter over the closed set of node types;
    it does NOT use Python's eval().

    Args:
        expr: Parsed expression tree.
        source: Original text, used only to position error markers.
        trace: Optional recorder receiving one line per reduction.

    Returns:
        The computed value, always finite.

    Raises:
        EvalError: If an operation is undefined or overflows.
    """
    return _Evaluator(source, trace).interpret(expr)
