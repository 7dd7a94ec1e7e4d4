"""CLI entry point for sci-calc.

Invoked as::

    sci-calc [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m scicalc.cli.main

Commands
--------
eval        Evaluate an expression and print the result
tokens      Show the tokens of an expression
parse       Dump the parsed expression tree to JSON or YAML
repl        Interactive calculator with history
version     Show version information
"""
from __future__ import annotations

import logging
import re
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from scicalc.calculator import Calculator
from scicalc.cli.history import DEFAULT_HISTORY_SIZE, History
from scicalc.config import DEFAULT_CONFIG, EvaluatorConfig, load_config
from scicalc.errors import ConfigError, EvalError

console = Console()
err_console = Console(stderr=True)

_ANS = re.compile(r"\bans\b")


def _load_config_or_exit(
    path: str | None,
    precision: int | None = None,
    radians: bool = False,
) -> EvaluatorConfig:
    """Build the effective config from an optional file and CLI overrides."""
    try:
        config = load_config(path) if path else DEFAULT_CONFIG
        return config.replace(
            precision=precision,
            angle_unit="radians" if radians else None,
        )
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _error_panel(expression: str, exc: EvalError) -> Panel:
    """Render an evaluation error with a caret under the offending position."""
    body = Text()
    body.append(expression or "(empty)")
    if exc.position is not None and expression:
        body.append("\n" + " " * min(exc.position, len(expression)) + "^", style="bold red")
    body.append(f"\n{exc.message}")
    return Panel(
        body,
        title=f"[red]{type(exc).__name__}[/red] [dim]{exc.code}[/dim]",
        title_align="left",
        border_style="red",
    )


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="sci-calc")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Scientific expression evaluator: lexer, parser, evaluator, formatter."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from scicalc import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]sci-calc[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# eval command
# ---------------------------------------------------------------------------


@cli.command(name="eval")
@click.argument("expression")
@click.option("--raw", is_flag=True, default=False, help="Print the full float repr instead of display text")
@click.option("--precision", type=int, default=None, help="Decimal digits to round the result to")
@click.option("--radians", is_flag=True, default=False, help="Trigonometric arguments are radians")
@click.option("--config", "config_path", type=click.Path(exists=False), default=None, help="YAML config file")
def eval_command(
    expression: str,
    raw: bool,
    precision: int | None,
    radians: bool,
    config_path: str | None,
) -> None:
    """Evaluate EXPRESSION and print the result.

    Examples:

    \b
        sci-calc eval "2 + 3 × 4"
        sci-calc eval "sin(pi / 6)" --radians
    """
    calculator = Calculator(_load_config_or_exit(config_path, precision, radians))
    try:
        value = calculator.evaluate(expression)
    except EvalError as exc:
        err_console.print(_error_panel(expression, exc))
        sys.exit(1)
    console.print(repr(value) if raw else calculator.format_result(value), highlight=False)


# ---------------------------------------------------------------------------
# tokens command
# ---------------------------------------------------------------------------


@cli.command(name="tokens")
@click.argument("expression")
def tokens_command(expression: str) -> None:
    """Show the tokens the lexer produces for EXPRESSION."""
    from scicalc.lexer import tokenize

    try:
        tokens = tokenize(expression)
    except EvalError as exc:
        err_console.print(_error_panel(expression, exc))
        sys.exit(1)

    table = Table(title=f"Tokens: {escape(expression)}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="bold")
    table.add_column("Value")
    table.add_column("Position", justify="right")
    for index, tok in enumerate(tokens):
        table.add_row(str(index), tok.type.name, tok.value, f"{tok.offset}:{tok.end}")
    console.print(table)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("expression")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml", "text"], case_sensitive=False),
    default="json",
    help="Tree output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def parse_command(expression: str, output_format: str, output: str | None) -> None:
    """Parse EXPRESSION and dump the expression tree."""
    from scicalc.ast import AstSerializer
    from scicalc.formatter import format_expression

    try:
        tree = Calculator().parse(expression)
    except EvalError as exc:
        err_console.print(_error_panel(expression, exc))
        sys.exit(1)

    serializer = AstSerializer()
    output_format = output_format.lower()
    try:
        if output_format == "json":
            text = serializer.to_json(tree, indent=2)
        elif output_format == "yaml":
            text = serializer.to_yaml(tree)
        else:
            text = format_expression(tree) + "\n"
    except RecursionError:
        # long operator chains nest one dict level per operator
        err_console.print(
            f"[red]Error:[/red] Tree is too deep to write as {output_format}; "
            "use --format text"
        )
        sys.exit(1)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Tree written to[/green] {output}")
    elif output_format == "text":
        console.print(text.rstrip("\n"), highlight=False)
    else:
        console.print(Syntax(text, output_format, line_numbers=False))


# ---------------------------------------------------------------------------
# repl command
# ---------------------------------------------------------------------------


def _print_history(history: History) -> None:
    if not len(history):
        console.print("[dim]No history yet.[/dim]")
        return
    table = Table(title="History", show_header=True)
    table.add_column("Expression")
    table.add_column("Result", justify="right", style="bold")
    table.add_column("Time", style="dim")
    for item in history:
        table.add_row(escape(item.expression), item.result, item.timestamp.strftime("%H:%M:%S"))
    console.print(table)


@cli.command(name="repl")
@click.option("--precision", type=int, default=None, help="Decimal digits to round results to")
@click.option("--radians", is_flag=True, default=False, help="Trigonometric arguments are radians")
@click.option("--config", "config_path", type=click.Path(exists=False), default=None, help="YAML config file")
@click.option(
    "--history-size",
    type=click.IntRange(min=1),
    default=DEFAULT_HISTORY_SIZE,
    show_default=True,
    help="Number of calculations kept in history",
)
def repl_command(
    precision: int | None,
    radians: bool,
    config_path: str | None,
    history_size: int,
) -> None:
    """Interactive calculator.

    Type an expression to evaluate it.  ``ans`` stands for the previous
    result.  Shell commands: ``:history``, ``:clear``, ``:quit``.
    """
    calculator = Calculator(_load_config_or_exit(config_path, precision, radians))
    history = History(max_items=history_size)
    console.print("[bold]sci-calc[/bold] interactive mode, type :quit to exit")

    while True:
        try:
            line = console.input("[bold cyan]calc>[/bold cyan] ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line:
            continue
        if line in (":quit", ":q", ":exit"):
            break
        if line == ":history":
            _print_history(history)
            continue
        if line == ":clear":
            history.clear()
            console.print("[dim]History cleared.[/dim]")
            continue

        expression = line
        if _ANS.search(line):
            if history.latest is None:
                err_console.print("[yellow]No previous result for 'ans'.[/yellow]")
                continue
            expression = _ANS.sub(f"({history.latest.result})", line)

        try:
            result = calculator.evaluate_to_text(expression)
        except EvalError as exc:
            err_console.print(_error_panel(expression, exc))
            continue
        history.add(line, result)
        console.print(f"= {result}", style="bold", markup=False, highlight=False)


if __name__ == "__main__":
    cli()
