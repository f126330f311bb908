"""
Expression tree types for mathtrace.

The parser produces a short-lived, frozen tree which the evaluator walks
once in post-order and then drops. Nothing here is persisted.

Supports:
- Arithmetic: +, -, *, /, ^
- Unary signs: -x, +x
- Function calls: sin, cos, tan, asin, acos, atan, sqrt, abs, log, ln
- Constants: pi, e
"""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators and built-ins
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class UnaryOp(StrEnum):
    """Prefix sign operators."""

    NEG = "-"
    POS = "+"


class MathFunction(StrEnum):
    """Closed set of single-argument functions."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    SQRT = "sqrt"
    ABS = "abs"
    LOG = "log"  # base 10
    LN = "ln"


# Constant name -> value. The tokenizer also accepts the glyph "π" for pi.
CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """A numeric literal as written in the source."""

    value: float = Field(description="Parsed literal value")
    text: str = Field(description="Literal source text")
    pos: int = Field(default=0, description="Source offset")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


class Constant(BaseModel):
    """A named constant: pi or e."""

    name: str = Field(description="Normalized constant name")
    value: float = Field(description="Constant value")
    pos: int = Field(default=0, description="Source offset")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr
    pos: int = Field(default=0, description="Offset of the operator")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class UnaryExpr(BaseModel):
    """Unary sign: op operand."""

    op: UnaryOp
    operand: Expr
    pos: int = Field(default=0, description="Offset of the sign")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"


class FuncCall(BaseModel):
    """Function application: name(arg)."""

    name: MathFunction
    arg: Expr
    pos: int = Field(default=0, description="Offset of the function name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.name.value}({self.arg})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Number | Constant | BinaryExpr | UnaryExpr | FuncCall

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
UnaryExpr.model_rebuild()
FuncCall.model_rebuild()
