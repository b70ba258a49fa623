"""Command-line interface for code-cloze."""

from __future__ import annotations

import typer

from .cli_commands import generation_commands

app = typer.Typer(
    name="code-cloze",
    help="Turn source files into syntax-highlighted cloze cards for Anki.",
    no_args_is_help=True,
)

generation_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
