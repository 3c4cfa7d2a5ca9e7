"""
Expression tree types for intcalc.

A parsed input line is one of three frozen node types:
- Constant: an integer literal, ``42``
- Identifier: a variable name, ``x``
- BinaryExpr: ``left op right`` for op in ``= + - * /``

The set of node types is closed. Code that walks a tree dispatches on the
node type directly instead of asking the nodes to act on themselves.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from intcalc.core.errors import TypeMismatchError, TypeMismatchKind

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class ExprKind(StrEnum):
    """Variant tag of an expression node."""

    CONSTANT = "constant"
    IDENTIFIER = "identifier"
    COMPOUND = "compound"


class BinaryOp(StrEnum):
    """Binary operators, including assignment."""

    ASSIGN = "="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Constant(BaseModel):
    """An integer literal."""

    value: int = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # No unary minus in the grammar
        if self.value < 0:
            return f"(0 - {-self.value})"
        return str(self.value)


class Identifier(BaseModel):
    """A variable name. It only has a value relative to an EvaluationContext."""

    name: str = Field(description="Variable name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Constant | Identifier | BinaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()


# ---------------------------------------------------------------------------
# Structural queries
# ---------------------------------------------------------------------------


def expr_kind(expr: Expr) -> ExprKind:
    """Return the variant tag of a node."""
    if isinstance(expr, Constant):
        return ExprKind.CONSTANT
    if isinstance(expr, Identifier):
        return ExprKind.IDENTIFIER
    if isinstance(expr, BinaryExpr):
        return ExprKind.COMPOUND
    raise TypeError(f"Not an expression node: {type(expr).__name__}")


def _wrong_variant(expr: Expr, wanted: str) -> TypeMismatchError:
    return TypeMismatchError(
        TypeMismatchKind.FIELD_ACCESS_ON_WRONG_VARIANT,
        f"{expr_kind(expr)} expression has no {wanted}",
    )


def constant_value(expr: Expr) -> int:
    """Value of a Constant node."""
    if not isinstance(expr, Constant):
        raise _wrong_variant(expr, "constant value")
    return expr.value


def identifier_name(expr: Expr) -> str:
    """Name of an Identifier node."""
    if not isinstance(expr, Identifier):
        raise _wrong_variant(expr, "identifier name")
    return expr.name


def operator_of(expr: Expr) -> BinaryOp:
    """Operator of a BinaryExpr node."""
    if not isinstance(expr, BinaryExpr):
        raise _wrong_variant(expr, "operator")
    return expr.op


def left_of(expr: Expr) -> Expr:
    """Left operand of a BinaryExpr node."""
    if not isinstance(expr, BinaryExpr):
        raise _wrong_variant(expr, "left operand")
    return expr.left


def right_of(expr: Expr) -> Expr:
    """Right operand of a BinaryExpr node."""
    if not isinstance(expr, BinaryExpr):
        raise _wrong_variant(expr, "right operand")
    return expr.right


def node_count(expr: Expr) -> int:
    """Total number of nodes in the tree."""
    if isinstance(expr, BinaryExpr):
        return 1 + node_count(expr.left) + node_count(expr.right)
    return 1


def identifiers(expr: Expr) -> list[str]:
    """Distinct identifier names in the tree, in left-to-right order."""
    seen: list[str] = []

    def _walk(node: Expr) -> None:
        if isinstance(node, Identifier):
            if node.name not in seen:
                seen.append(node.name)
        elif isinstance(node, BinaryExpr):
            _walk(node.left)
            _walk(node.right)

    _walk(expr)
    return seen
