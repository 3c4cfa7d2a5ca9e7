"""
Variable store for expression evaluation.

One flat namespace per session. Names are bound on first assignment and
can be rebound but never removed.
"""

from __future__ import annotations

from collections.abc import Iterator

from intcalc.core.errors import UndefinedIdentifierError


class EvaluationContext:
    """Mutable mapping from identifier name to integer value."""

    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self._symbols: dict[str, int] = dict(initial or {})

    def is_defined(self, name: str) -> bool:
        """True if ``name`` has been assigned at least once."""
        return name in self._symbols

    def get(self, name: str) -> int:
        """Value bound to ``name``.

        Raises:
            UndefinedIdentifierError: If ``name`` was never assigned.
        """
        if name not in self._symbols:
            raise UndefinedIdentifierError(name)
        return self._symbols[name]

    def set(self, name: str, value: int) -> None:
        self._symbols[name] = value

    def names(self) -> list[str]:
        """Bound names in order of first assignment."""
        return list(self._symbols)

    def snapshot(self) -> dict[str, int]:
        """Copy of the current bindings."""
        return dict(self._symbols)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"EvaluationContext({self._symbols!r})"
