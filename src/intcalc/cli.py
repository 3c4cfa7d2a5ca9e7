"""
intcalc command line.

Commands:
  • repl   interactive session (the default with no command)
  • eval   evaluate expressions in order, sharing one set of variables
  • parse  show the expression tree of one expression
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from intcalc._version import get_version
from intcalc.core.config import CalcConfig, load_config
from intcalc.core.errors import CalcError, ConfigError, NestingTooDeepError
from intcalc.core.expression_lang.parser import parse_expr
from intcalc.core.ir.expressions import identifiers, node_count
from intcalc.repl import Session, run_repl

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="intcalc – interactive integer calculator with variables",
    invoke_without_command=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"intcalc {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _load(ctx: typer.Context) -> CalcConfig:
    config = ctx.obj
    if not isinstance(config, CalcConfig):
        config = CalcConfig()
    return config


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to intcalc.toml (default: ./intcalc.toml if present)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """intcalc CLI main callback for global options."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=2) from e

    configure_logging("DEBUG" if verbose else config.logging.level)
    logger.debug("Loaded configuration: %s", config)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        run_repl(Session.from_config(config), config)


@app.command("repl")
def repl_command(ctx: typer.Context) -> None:
    """Start an interactive session."""
    config = _load(ctx)
    run_repl(Session.from_config(config), config)


@app.command("eval")
def eval_command(
    ctx: typer.Context,
    expressions: list[str] = typer.Argument(..., help="Expressions, evaluated left to right"),
) -> None:
    """Evaluate expressions in order against one shared set of variables."""
    config = _load(ctx)
    session = Session.from_config(config)

    for source in expressions:
        result = session.run_line(source)
        if result.skipped:
            continue
        if result.error is not None:
            typer.echo(f"ERROR: {result.error}", err=True)
            raise typer.Exit(code=1)
        typer.echo(result.text)


@app.command("parse")
def parse_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to parse"),
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON"),
) -> None:
    """Show the expression tree of one expression without evaluating it."""
    config = _load(ctx)
    try:
        expr = parse_expr(
            expression,
            config.parser.associativity,
            ignore_whitespace=config.parser.ignore_whitespace,
            scan_strings=config.parser.scan_strings,
        )
    except CalcError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1) from e

    # A LEFT-grouped chain parses iteratively but is walked recursively.
    try:
        if as_json:
            typer.echo(expr.model_dump_json(indent=2))
            return
        text = str(expr)
        names = ", ".join(identifiers(expr)) or "none"
        summary = f"{node_count(expr)} node(s); identifiers: {names}"
    except (RecursionError, ValueError) as e:
        typer.echo(f"ERROR: {NestingTooDeepError()}", err=True)
        raise typer.Exit(code=1) from e

    console = Console()
    console.print(text, markup=False, highlight=False)
    console.print(f"[dim]{escape(summary)}[/dim]")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
