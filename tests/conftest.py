"""Shared pytest fixtures for intcalc tests."""

from collections.abc import Callable

import pytest

from intcalc.core.context import EvaluationContext
from intcalc.core.expression_lang import evaluate, parse_expr


@pytest.fixture
def context() -> EvaluationContext:
    """Return an empty evaluation context."""
    return EvaluationContext()


@pytest.fixture
def calc(context: EvaluationContext) -> Callable[[str], int]:
    """Return a function that parses and evaluates a line against ``context``."""

    def _calc(source: str) -> int:
        return evaluate(parse_expr(source), context)

    return _calc


@pytest.fixture
def scripted_input() -> Callable[[list[str]], Callable[[str], str]]:
    """Return a factory for line readers that replay lines, then raise EOFError."""

    def _factory(lines: list[str]) -> Callable[[str], str]:
        pending = list(lines)

        def _read(prompt: str) -> str:
            if not pending:
                raise EOFError
            return pending.pop(0)

        return _read

    return _factory
