"""
Precedence-climbing parser for the intcalc expression language.

Grammar:
    expr  → term | term op expr
    term  → NUMBER | WORD | "(" expr ")"
    op    → "=" | "+" | "-" | "*" | "/"

Operator precedence (higher binds tighter):
    =       1
    + -     2
    * /     3

With the default RIGHT associativity every operator groups right to left,
so ``1 - 2 - 3`` is ``1 - (2 - 3)``. LEFT associativity groups the
arithmetic operators left to right; ``=`` always groups right to left.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from intcalc.core.errors import (
    ErrorContext,
    ExpressionSyntaxError,
    NestingTooDeepError,
    NumberTooLargeError,
    SyntaxErrorKind,
    make_syntax_error,
)
from intcalc.core.expression_lang.tokenizer import Token, TokenKind, TokenScanner
from intcalc.core.ir.expressions import BinaryExpr, BinaryOp, Constant, Expr, Identifier

logger = logging.getLogger(__name__)


class Associativity(StrEnum):
    """Grouping of equal-precedence arithmetic operators."""

    RIGHT = "right"
    LEFT = "left"


_PRECEDENCE: dict[str, int] = {
    "=": 1,
    "+": 2,
    "-": 2,
    "*": 3,
    "/": 3,
}


def precedence(token: Token) -> int:
    """Binding strength of a token; 0 for anything that is not an operator."""
    if token.kind != TokenKind.OPERATOR:
        return 0
    return _PRECEDENCE.get(token.value, 0)


class _Parser:
    """Recursive descent parser driven by a TokenScanner."""

    def __init__(self, scanner: TokenScanner, associativity: Associativity) -> None:
        self.scanner = scanner
        self.associativity = associativity

    def next_token(self) -> Token:
        tok = self.scanner.next_token()
        while tok.kind == TokenKind.WHITESPACE:
            tok = self.scanner.next_token()
        return tok

    def error(self, kind: SyntaxErrorKind, message: str, tok: Token) -> ExpressionSyntaxError:
        return make_syntax_error(kind, message, self.scanner.source, tok.pos)

    def constant(self, tok: Token) -> Constant:
        try:
            return Constant(value=int(tok.value))
        except ValueError as e:
            raise NumberTooLargeError(
                f"Number literal has too many digits ({len(tok.value)})",
                ErrorContext(source=self.scanner.source, column=tok.pos + 1),
            ) from e

    # -- Grammar rules --

    def read_expr(self, min_prec: int) -> Expr:
        """term (op expr)* while op binds tighter than min_prec."""
        expr = self.read_term()
        while True:
            tok = self.next_token()
            tprec = precedence(tok)
            if tprec <= min_prec:
                self.scanner.push_back(tok)
                return expr
            rhs = self.read_expr(self._rhs_precedence(tok, tprec))
            logger.debug("Reduced operator %s at column %d", tok.value, tok.pos + 1)
            expr = BinaryExpr(op=BinaryOp(tok.value), left=expr, right=rhs)

    def _rhs_precedence(self, tok: Token, tprec: int) -> int:
        # Parsing the right operand one level lower lets an equal-precedence
        # operator continue inside the recursion, which groups right to left.
        if self.associativity == Associativity.RIGHT or tok.value == BinaryOp.ASSIGN:
            return tprec - 1
        return tprec

    def read_term(self) -> Expr:
        """NUMBER | WORD | '(' expr ')'"""
        tok = self.next_token()

        if tok.kind == TokenKind.WORD:
            return Identifier(name=tok.value)
        if tok.kind == TokenKind.NUMBER:
            return self.constant(tok)
        if tok.value != "(" or tok.kind != TokenKind.PUNCTUATION:
            found = repr(tok.value) if tok.kind != TokenKind.END else "end of input"
            raise self.error(
                SyntaxErrorKind.ILLEGAL_TERM,
                f"Illegal term in expression: {found}",
                tok,
            )

        expr = self.read_expr(0)

        closing = self.next_token()
        if closing.value != ")" or closing.kind != TokenKind.PUNCTUATION:
            raise self.error(
                SyntaxErrorKind.UNBALANCED_PARENTHESIS,
                "Unbalanced parenthesis",
                closing,
            )
        return expr


def parse_tokens(
    scanner: TokenScanner,
    associativity: Associativity = Associativity.RIGHT,
) -> Expr:
    """Parse one complete expression from a scanner that has its input set.

    Raises:
        ExpressionSyntaxError: If the tokens do not form exactly one expression.
        NestingTooDeepError: If parentheses or operators nest past the recursion limit.
        NumberTooLargeError: If a number literal has too many digits to convert.
    """
    parser = _Parser(scanner, associativity)
    try:
        expr = parser.read_expr(0)
    except RecursionError as e:
        raise NestingTooDeepError() from e

    # Ensure all tokens consumed
    tok = parser.next_token()
    if tok.kind != TokenKind.END:
        raise parser.error(
            SyntaxErrorKind.UNEXPECTED_TRAILING_TOKEN,
            f"Unexpected token {tok.value!r}",
            tok,
        )
    return expr


def parse_expr(
    source: str,
    associativity: Associativity = Associativity.RIGHT,
    *,
    ignore_whitespace: bool = True,
    scan_strings: bool = True,
) -> Expr:
    """Parse an input line into an expression tree.

    Args:
        source: Expression string (e.g., "x = y * (2 + 3)")
        associativity: Grouping of equal-precedence arithmetic operators.

    Returns:
        Parsed expression tree.

    Raises:
        ExpressionSyntaxError: If the expression is invalid.
    """
    scanner = TokenScanner(ignore_whitespace=ignore_whitespace, scan_strings=scan_strings)
    scanner.set_input(source)
    return parse_tokens(scanner, associativity)
