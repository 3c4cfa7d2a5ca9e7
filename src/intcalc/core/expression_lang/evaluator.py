"""
Expression evaluator for the intcalc expression language.

Walks an expression tree against an EvaluationContext. Assignment is the
only side effect. Does NOT use Python's eval().
"""

from __future__ import annotations

import logging

from intcalc.core.context import EvaluationContext
from intcalc.core.errors import (
    DivisionByZeroError,
    IllegalOperatorError,
    NestingTooDeepError,
    TypeMismatchError,
    TypeMismatchKind,
)
from intcalc.core.ir.expressions import BinaryExpr, BinaryOp, Constant, Expr, Identifier

logger = logging.getLogger(__name__)


def evaluate(expr: Expr, context: EvaluationContext) -> int:
    """Evaluate an expression tree, binding variables on assignment.

    The right operand of every binary node is evaluated before the left
    one, so ``x + (x = 5)`` sees the new value of ``x`` on both sides.
    Evaluation is not transactional: assignments made before an error
    stay in the context.

    Args:
        expr: Parsed expression tree.
        context: Variable bindings, read and updated in place.

    Returns:
        The computed integer.

    Raises:
        UndefinedIdentifierError: An identifier was read before assignment.
        TypeMismatchError: The target of ``=`` is not an identifier.
        DivisionByZeroError: The divisor of ``/`` evaluated to zero.
        IllegalOperatorError: A node carries an unknown operator.
        NestingTooDeepError: The tree is deeper than the recursion limit.
    """
    try:
        return _interpret(expr, context)
    except RecursionError as e:
        raise NestingTooDeepError() from e


def _interpret(expr: Expr, ctx: EvaluationContext) -> int:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Constant):
        return expr.value

    if isinstance(expr, Identifier):
        return ctx.get(expr.name)

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr, ctx)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_binary(expr: BinaryExpr, ctx: EvaluationContext) -> int:
    """Evaluate a binary expression, right operand first."""
    right = _interpret(expr.right, ctx)

    if expr.op == BinaryOp.ASSIGN:
        if not isinstance(expr.left, Identifier):
            raise TypeMismatchError(
                TypeMismatchKind.ASSIGNMENT_TARGET_NOT_IDENTIFIER,
                f"Cannot assign to {expr.left}: not an identifier",
            )
        ctx.set(expr.left.name, right)
        logger.debug("Assigned %s", expr.left.name)
        return right

    left = _interpret(expr.left, ctx)

    if expr.op == BinaryOp.ADD:
        return left + right
    if expr.op == BinaryOp.SUB:
        return left - right
    if expr.op == BinaryOp.MUL:
        return left * right
    if expr.op == BinaryOp.DIV:
        if right == 0:
            raise DivisionByZeroError()
        return _truncating_div(left, right)

    raise IllegalOperatorError(str(expr.op))


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero: -7 / 2 == -3."""
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        return -quotient
    return quotient
