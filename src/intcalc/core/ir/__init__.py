"""
intcalc intermediate representation: the expression tree.
"""

from .expressions import (
    BinaryExpr,
    BinaryOp,
    Constant,
    Expr,
    ExprKind,
    Identifier,
    constant_value,
    expr_kind,
    identifier_name,
    identifiers,
    left_of,
    node_count,
    operator_of,
    right_of,
)

__all__ = [
    "BinaryExpr",
    "BinaryOp",
    "Constant",
    "Expr",
    "ExprKind",
    "Identifier",
    "constant_value",
    "expr_kind",
    "identifier_name",
    "identifiers",
    "left_of",
    "node_count",
    "operator_of",
    "right_of",
]
