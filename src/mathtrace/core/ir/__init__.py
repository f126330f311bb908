"""
mathtrace intermediate representation: the expression tree node types.
"""

from .expressions import (
    CONSTANTS,
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

__all__ = [
    "CONSTANTS",
    "BinaryExpr",
    "BinaryOp",
    "Constant",
    "Expr",
    "FuncCall",
    "MathFunction",
    "Number",
    "UnaryExpr",
    "UnaryOp",
]
