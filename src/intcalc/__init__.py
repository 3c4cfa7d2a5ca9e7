"""
intcalc - an interactive integer calculator with variables.

Reads arithmetic expressions, parses them into an expression tree with
precedence climbing, and evaluates the tree against a variable store that
lives for the whole session.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.context import EvaluationContext
from .core.errors import (
    CalcError,
    ConfigError,
    DivisionByZeroError,
    ExpressionSyntaxError,
    IllegalOperatorError,
    NestingTooDeepError,
    NumberTooLargeError,
    TypeMismatchError,
    UndefinedIdentifierError,
)
from .core.expression_lang import Associativity, evaluate, parse_expr

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Associativity",
    "CalcError",
    "ConfigError",
    "DivisionByZeroError",
    "EvaluationContext",
    "ExpressionSyntaxError",
    "IllegalOperatorError",
    "NestingTooDeepError",
    "NumberTooLargeError",
    "TypeMismatchError",
    "UndefinedIdentifierError",
    "evaluate",
    "parse_expr",
]
