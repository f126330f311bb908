"""
mathtrace CLI.

Commands:
- eval:     evaluate one expression and print the result and derivation steps
- tokens:   show how an expression is tokenized
- examples: evaluate the built-in example expressions
- repl:     interactive calculator session
"""

from __future__ import annotations

import json
import logging
import platform
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from mathtrace._version import get_version
from mathtrace.core.errors import MathTraceError
from mathtrace.core.expression_lang import EvaluationResult, Token, evaluate, format_number, tokenize
from mathtrace.core.manifest import ConfigError, MathTraceConfig, resolve_config
from mathtrace.core.session import CalculatorSession

logger = logging.getLogger(__name__)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

EXAMPLES = [
    "2 + 3 * 4",
    "sin(pi / 2)",
    "sqrt(144) + 3^2",
    "log(1000)",
    "ln(e^5)",
    "abs(-42) * 2",
    "(1 + 2) * (3 + 4)",
    "cos(0) + tan(pi/4)",
]

app = typer.Typer(
    help="""mathtrace – evaluate math expressions and show every step

Operators: + - * / ^ (right-associative) and unary + -
Functions: sin cos tan asin acos atan sqrt abs log (base 10) ln
Constants: pi (or π), e

Expressions starting with '-' need a '--' separator:
  mathtrace eval -- "-2^2"
""",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"mathtrace version {get_version()}")
        typer.echo(f"  Python:   {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform: {platform.system()} {platform.release()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """mathtrace CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# =============================================================================
# Helpers
# =============================================================================


def _load_config(config_path: Path | None) -> MathTraceConfig:
    try:
        config = resolve_config(config_path)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(code=1)
    logger.debug("Using config from %s", config.source or "defaults")
    return config


def _print_error(error: MathTraceError) -> None:
    err_console.print(error.describe(), style="red", markup=False)


def _print_steps(result: EvaluationResult) -> None:
    if not result.trace:
        return
    console.print("[bold]Steps[/bold]")
    width = len(str(len(result.trace)))
    for i, step in enumerate(result.trace, start=1):
        console.print(f"  {i:>{width}}. {step}", markup=False)


def _token_table(tokens: tuple[Token, ...] | list[Token], precision: int) -> Table:
    table = Table(title="Tokens")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind")
    table.add_column("Text")
    table.add_column("Value", justify="right")
    table.add_column("Pos", style="dim", justify="right")
    for i, tok in enumerate(tokens, start=1):
        table.add_row(
            str(i),
            str(tok.kind),
            tok.text,
            format_number(tok.value, precision) if tok.value is not None else "",
            str(tok.pos),
        )
    return table


# =============================================================================
# Commands
# =============================================================================


@app.command(name="eval")
def eval_command(
    expression: Annotated[str, typer.Argument(help="Expression, e.g. 'sqrt(144) + 3^2'")],
    steps: Annotated[
        bool | None,
        typer.Option("--steps/--no-steps", help="Show derivation steps (default from config)"),
    ] = None,
    show_tokens: Annotated[bool, typer.Option("--tokens", help="Also show the token table")] = False,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to mathtrace.toml")
    ] = None,
) -> None:
    """Evaluate an expression and print the result."""
    config = _load_config(config_path)

    try:
        result = evaluate(expression, config)
    except MathTraceError as e:
        if output_json:
            error = {"kind": e.kind, "message": e.message, "pos": e.pos}
            typer.echo(json.dumps({"expression": expression, "error": error}))
        else:
            _print_error(e)
        raise typer.Exit(code=1)

    if output_json:
        typer.echo(
            json.dumps(
                {
                    "expression": expression,
                    "result": result.value,
                    "display": result.display,
                    "trace": list(result.trace),
                }
            )
        )
        return

    if show_tokens:
        console.print(_token_table(result.tokens, config.display.precision))

    show_steps = config.display.show_steps if steps is None else steps
    if show_steps:
        _print_steps(result)

    console.print(f"[bold green]= {result.display}[/bold green]")


@app.command(name="tokens")
def tokens_command(
    expression: Annotated[str, typer.Argument(help="Expression to tokenize")],
) -> None:
    """Show the tokens an expression is split into."""
    try:
        tokens = tokenize(expression)
    except MathTraceError as e:
        _print_error(e)
        raise typer.Exit(code=1)

    if not tokens:
        console.print("[dim]No tokens.[/dim]")
        return
    console.print(_token_table(tokens, 12))


@app.command(name="examples")
def examples_command(
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to mathtrace.toml")
    ] = None,
) -> None:
    """Evaluate the built-in example expressions."""
    config = _load_config(config_path)

    table = Table(title="Examples")
    table.add_column("Expression")
    table.add_column("Result", justify="right")
    table.add_column("Steps", justify="right", style="dim")
    for expression in EXAMPLES:
        try:
            result = evaluate(expression, config)
        except MathTraceError as e:
            _print_error(e)
            raise typer.Exit(code=1)
        table.add_row(expression, result.display, str(len(result.trace)))
    console.print(table)


@app.command(name="repl")
def repl_command(
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to mathtrace.toml")
    ] = None,
) -> None:
    """Interactive calculator. Type an expression per line; :q to quit."""
    config = _load_config(config_path)
    session = CalculatorSession(config=config)
    console.print("[dim]mathtrace repl - :q quits[/dim]")

    while True:
        try:
            line = input("> ")
        except EOFError:
            break

        command = line.strip()
        if command in (":q", ":quit", ":exit"):
            break
        if not command:
            continue

        session.clear()
        session.append(line)
        result = session.equals()
        if session.error is not None:
            _print_error(session.error)
            continue
        if result is not None:
            if config.display.show_steps:
                _print_steps(result)
            console.print(f"[bold green]= {session.display}[/bold green]")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
