"""
Interactive read-evaluate-print loop.

A Session owns one EvaluationContext for its whole lifetime and runs input
lines through parse and evaluate one at a time. Errors abort only the
current line.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from intcalc.core.config import CalcConfig
from intcalc.core.context import EvaluationContext
from intcalc.core.errors import CalcError, NumberTooLargeError
from intcalc.core.expression_lang.evaluator import evaluate
from intcalc.core.expression_lang.parser import Associativity, parse_tokens
from intcalc.core.expression_lang.tokenizer import TokenScanner

logger = logging.getLogger(__name__)

VARS_COMMAND = ":vars"


@dataclass
class LineResult:
    """Outcome of one input line."""

    value: int | None = None
    text: str | None = None
    error: CalcError | None = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.skipped


class Session:
    """Parses and evaluates lines against a long-lived context."""

    def __init__(
        self,
        context: EvaluationContext | None = None,
        associativity: Associativity = Associativity.RIGHT,
        *,
        ignore_whitespace: bool = True,
        scan_strings: bool = True,
    ) -> None:
        self.context = context if context is not None else EvaluationContext()
        self.associativity = associativity
        self.scanner = TokenScanner(
            ignore_whitespace=ignore_whitespace,
            scan_strings=scan_strings,
        )

    @classmethod
    def from_config(cls, config: CalcConfig) -> Session:
        return cls(
            associativity=config.parser.associativity,
            ignore_whitespace=config.parser.ignore_whitespace,
            scan_strings=config.parser.scan_strings,
        )

    def run_line(self, line: str) -> LineResult:
        """Parse and evaluate one line. Blank lines are skipped."""
        if not line.strip():
            return LineResult(skipped=True)

        try:
            self.scanner.set_input(line)
            expr = parse_tokens(self.scanner, self.associativity)
            value = evaluate(expr, self.context)
            text = format_value(value)
        except CalcError as e:
            logger.debug("Line %r failed: %s", line, e.message)
            return LineResult(error=e)

        return LineResult(value=value, text=text)


def format_value(value: int) -> str:
    """Decimal text of a result.

    Raises:
        NumberTooLargeError: If the value has more digits than int-to-str allows.
    """
    try:
        return str(value)
    except ValueError as e:
        raise NumberTooLargeError(
            f"Result too large to display ({value.bit_length()} bits)"
        ) from e


def is_quit_command(line: str, quit_commands: list[str]) -> bool:
    """Exact, case-sensitive match against the session's quit sentinels."""
    return line in quit_commands


def print_vars(session: Session, console: Console) -> None:
    bindings = session.context.snapshot()
    if not bindings:
        console.print("[dim]No variables defined[/dim]")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Value", justify="right")
    for name, value in bindings.items():
        try:
            shown = format_value(value)
        except NumberTooLargeError:
            shown = "[dim]too large to display[/dim]"
        table.add_row(name, shown)
    console.print(table)


def run_repl(
    session: Session,
    config: CalcConfig,
    console: Console | None = None,
    input_fn: Callable[[str], str] | None = None,
) -> None:
    """
    Run the interactive loop until a quit command or end of input.

    Args:
        session: Session whose context persists across lines
        config: REPL settings (prompt, quit commands, banner)
        console: Rich console for output
        input_fn: Line reader taking the prompt; defaults to ``console.input``
    """
    console = console or Console()
    read_line = input_fn or console.input
    quit_commands = config.repl.quit_commands

    if config.repl.show_banner:
        hint = " or ".join(quit_commands) if quit_commands else "end of input"
        console.print(f"[bold cyan]intcalc[/bold cyan] [dim]type {escape(hint)} to leave[/dim]")

    while True:
        try:
            line = read_line(config.repl.prompt)
        except EOFError:
            break

        line = line.rstrip("\r\n")
        if is_quit_command(line, quit_commands):
            break
        if line.strip() == VARS_COMMAND:
            print_vars(session, console)
            continue

        result = session.run_line(line)
        if result.skipped:
            continue
        if result.error is not None:
            console.print(f"[red]Error:[/red] {escape(str(result.error))}")
            continue
        console.print(result.text, markup=False, highlight=False, soft_wrap=True)

    logger.debug("Session ended with %d variable(s) bound", len(session.context))
