"""
Error types for intcalc parsing, evaluation, and configuration.

Every error raised while handling a single input line derives from
``CalcError``; the REPL reports it and moves on to the next line.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class CalcError(Exception):
    """Base exception for all intcalc errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class SyntaxErrorKind(StrEnum):
    """Ways an input line can fail to parse."""

    UNEXPECTED_TRAILING_TOKEN = "unexpected_trailing_token"
    ILLEGAL_TERM = "illegal_term"
    UNBALANCED_PARENTHESIS = "unbalanced_parenthesis"
    UNTERMINATED_STRING = "unterminated_string"


class TypeMismatchKind(StrEnum):
    """Ways a node can be used as the wrong variant."""

    ASSIGNMENT_TARGET_NOT_IDENTIFIER = "assignment_target_not_identifier"
    FIELD_ACCESS_ON_WRONG_VARIANT = "field_access_on_wrong_variant"


class ExpressionSyntaxError(CalcError):
    """
    Raised when an input line cannot be parsed into an expression.

    Examples:
    - Tokens left over after a complete expression: ``1 2``
    - A term that is not a number, identifier, or group: ``* 3``
    - A ``(`` without its ``)``: ``(1 + 2``
    """

    def __init__(
        self,
        kind: SyntaxErrorKind,
        message: str,
        context: Optional["ErrorContext"] = None,
    ):
        self.kind = kind
        super().__init__(message, context)


class UndefinedIdentifierError(CalcError):
    """Raised when an identifier is read before it was ever assigned."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is undefined")


class TypeMismatchError(CalcError):
    """
    Raised when a node is used as a variant it is not.

    Examples:
    - Assigning to something other than an identifier: ``1 = 2``
    - Asking a constant for its identifier name
    """

    def __init__(self, kind: TypeMismatchKind, message: str):
        self.kind = kind
        super().__init__(message)


class DivisionByZeroError(CalcError):
    """Raised when the divisor of ``/`` evaluates to zero."""

    def __init__(self) -> None:
        super().__init__("Cannot divide by 0")


class IllegalOperatorError(CalcError):
    """Raised when a compound node carries an operator the evaluator does not know."""

    def __init__(self, op: str):
        self.op = op
        super().__init__(f"Illegal operation in expression: {op!r}")


class NestingTooDeepError(CalcError):
    """Raised when an expression nests deeper than the interpreter can recurse."""

    def __init__(self) -> None:
        super().__init__("Expression is nested too deeply")


class NumberTooLargeError(CalcError):
    """
    Raised when an integer has more decimal digits than can be converted.

    Covers both a number literal in the input and a result being printed.
    """

    pass


class ConfigError(CalcError):
    """Raised when an intcalc.toml file is malformed."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a single input line.

    Attributes:
        source: The input line being processed
        column: Column number (1-indexed)
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format the input line with a marker under the error column.

        Returns:
            Two lines: the source and a ``^`` marker.
        """
        marker_pos = max(self.column - 1, 0)
        return f"  {self.source}\n  {' ' * marker_pos}^"


def make_syntax_error(
    kind: SyntaxErrorKind,
    message: str,
    source: str | None = None,
    pos: int | None = None,
) -> ExpressionSyntaxError:
    """
    Helper to create an ExpressionSyntaxError with optional context.

    Args:
        kind: Which syntax rule was violated
        message: Error description
        source: Optional input line
        pos: Optional 0-indexed offset of the offending token

    Returns:
        ExpressionSyntaxError with context if a location was provided
    """
    if source is not None and pos is not None:
        return ExpressionSyntaxError(kind, message, ErrorContext(source=source, column=pos + 1))
    return ExpressionSyntaxError(kind, message)
