"""
Tokenizer for the intcalc expression language.

Converts an input line into typed tokens and exposes them through a
TokenScanner with one token of push-back.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from intcalc.core.errors import SyntaxErrorKind, make_syntax_error


class TokenKind(StrEnum):
    """Token types for the expression language."""

    WORD = auto()
    NUMBER = auto()
    STRING = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    WHITESPACE = auto()

    # End of input
    END = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, name):
            raise AttributeError(f"Token is immutable: cannot set {name!r}")
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.value, self.pos) == (other.kind, other.value, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.pos))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


_PUNCTUATION = frozenset("()[]{},;:.")

# ASCII digits only; other Unicode characters fall through to OPERATOR
_NUMBER_RE = re.compile(r"[0-9]+")
# Identifier: letter or underscore followed by alphanumerics/underscores
_WORD_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
_WHITESPACE_RE = re.compile(r"\s+")


def tokenize(
    source: str,
    *,
    ignore_whitespace: bool = True,
    scan_strings: bool = True,
) -> list[Token]:
    """Tokenize an input line into a list of tokens ending with END."""
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        m = _WHITESPACE_RE.match(source, i)
        if m:
            if not ignore_whitespace:
                tokens.append(Token(TokenKind.WHITESPACE, m.group(0), i))
            i = m.end()
            continue

        # String literals
        if scan_strings and c in ('"', "'"):
            i, tok = _read_string(source, i)
            tokens.append(tok)
            continue

        m = _NUMBER_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.NUMBER, m.group(0), i))
            i = m.end()
            continue

        m = _WORD_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.WORD, m.group(0), i))
            i = m.end()
            continue

        if c in _PUNCTUATION:
            tokens.append(Token(TokenKind.PUNCTUATION, c, i))
        else:
            tokens.append(Token(TokenKind.OPERATOR, c, i))
        i += 1

    tokens.append(Token(TokenKind.END, "", n))
    return tokens


def _read_string(source: str, start: int) -> tuple[int, Token]:
    """Read a quoted string literal, keeping its quotes in the token value."""
    quote = source[start]
    i = start + 1
    n = len(source)

    while i < n:
        c = source[i]
        if c == "\\":
            i += 2
            continue
        if c == quote:
            return i + 1, Token(TokenKind.STRING, source[start : i + 1], start)
        i += 1

    raise make_syntax_error(
        SyntaxErrorKind.UNTERMINATED_STRING,
        "Unterminated string literal",
        source,
        start,
    )


class TokenScanner:
    """
    Sequential access to the tokens of one input line.

    The scanner is reusable: ``set_input`` replaces the current line and
    clears any pushed-back token. Once the line is exhausted, ``next_token``
    keeps returning an END token.
    """

    def __init__(self, *, ignore_whitespace: bool = True, scan_strings: bool = True) -> None:
        self.ignore_whitespace = ignore_whitespace
        self.scan_strings = scan_strings
        self.source = ""
        self._tokens: list[Token] = [Token(TokenKind.END, "", 0)]
        self._pos = 0
        self._saved: Token | None = None

    def set_input(self, source: str) -> None:
        """Start scanning a new line.

        Raises:
            ExpressionSyntaxError: If the line contains an unterminated string.
        """
        self.source = source
        self._tokens = [Token(TokenKind.END, "", 0)]
        self._pos = 0
        self._saved = None
        self._tokens = tokenize(
            source,
            ignore_whitespace=self.ignore_whitespace,
            scan_strings=self.scan_strings,
        )

    def next_token(self) -> Token:
        if self._saved is not None:
            tok = self._saved
            self._saved = None
            return tok
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def push_back(self, token: Token) -> None:
        """Return one token to the scanner; it is the next one read."""
        if self._saved is not None:
            raise RuntimeError("TokenScanner holds at most one pushed-back token")
        self._saved = token

    def peek_kind(self) -> TokenKind:
        if self._saved is not None:
            return self._saved.kind
        return self._tokens[self._pos].kind

    def has_more_tokens(self) -> bool:
        return self.peek_kind() != TokenKind.END

    @staticmethod
    def classify(token: Token) -> TokenKind:
        return token.kind
