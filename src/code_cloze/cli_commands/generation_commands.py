"""Card generation commands: generate, preview, update-template."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from code_cloze.anki.client import AnkiClient
from code_cloze.cloze.driver import (
    SynthesisOptions,
    build_cards,
    generate_cards,
    update_note_type,
)
from code_cloze.cloze.toolkit import LanguageToolkit
from code_cloze.exceptions import ConfigurationError

from .shared import console, get_config_and_logger

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config.yaml", exists=True, dir_okay=False),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Log level (DEBUG, INFO, WARN, ERROR)"),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Show all log messages")
]


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Cannot read {path}: {e}[/bold red]")
        raise typer.Exit(code=1) from e


def register(app: typer.Typer) -> None:
    """Register generation commands on the given Typer app."""

    @app.command()
    def generate(
        file: Annotated[
            Path,
            typer.Argument(help="Source file to turn into cards", exists=True, dir_okay=False),
        ],
        title: Annotated[
            str | None, typer.Option("--title", "-t", help="Card title (file name if omitted)")
        ] = None,
        deck: Annotated[
            str | None, typer.Option("--deck", "-d", help="Target Anki deck")
        ] = None,
        tag: Annotated[
            list[str] | None, typer.Option("--tag", help="Note tag (repeatable)")
        ] = None,
        max_blanks: Annotated[
            int | None,
            typer.Option("--max-blanks", min=1, help="Maximum blanks per card"),
        ] = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
        verbose: VerboseOption = False,
    ) -> None:
        """Generate cloze cards from a source file and add them to Anki."""
        try:
            config, logger = get_config_and_logger(config_path, log_level, verbose)
            if max_blanks is not None:
                config.max_blanks_per_card = max_blanks
        except ConfigurationError as e:
            console.print(f"[bold red]{e}[/bold red]")
            raise typer.Exit(code=1) from e

        source = _read_source(file)
        result = generate_cards(
            source,
            title if title is not None else file.name,
            deck,
            tag,
            config=config,
        )
        logger.debug("generate_command_finished", **result.to_dict())

        if not result.success:
            console.print(f"[bold red]{result.message}[/bold red]")
            raise typer.Exit(code=1)

        table = Table(title="Cloze cards")
        table.add_column("File")
        table.add_column("Deck")
        table.add_column("Added", justify="right")
        table.add_column("Total", justify="right")
        table.add_row(
            str(file),
            deck or config.anki_deck_name,
            str(result.added_count),
            str(result.total_cards),
        )
        console.print(table)
        if result.added_count != result.total_cards:
            console.print("[yellow]Some cards could not be added; see the log.[/yellow]")

    @app.command()
    def preview(
        file: Annotated[
            Path,
            typer.Argument(help="Source file to render", exists=True, dir_okay=False),
        ],
        title: Annotated[str | None, typer.Option("--title", "-t")] = None,
        max_blanks: Annotated[int | None, typer.Option("--max-blanks", min=1)] = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Print the rendered card markup without contacting Anki."""
        try:
            config, _logger = get_config_and_logger(config_path, log_level)
            if max_blanks is not None:
                config.max_blanks_per_card = max_blanks
        except ConfigurationError as e:
            console.print(f"[bold red]{e}[/bold red]")
            raise typer.Exit(code=1) from e

        cards = build_cards(
            _read_source(file),
            LanguageToolkit(config.language, config.highlight_style),
            SynthesisOptions.from_config(config),
            title=title if title is not None else file.name,
            deck_name=config.anki_deck_name,
            tags=config.default_tags,
        )
        for card in cards:
            console.rule(f"{card.title or file.name} ({card.blank_count} blanks)")
            # Raw markup; rich must not interpret the brackets
            console.print(
                card.text, markup=False, highlight=False, emoji=False, soft_wrap=True
            )

    @app.command(name="update-template")
    def update_template(
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Overwrite the cloze note type's template and styling in Anki."""
        try:
            config, _logger = get_config_and_logger(config_path, log_level)
        except ConfigurationError as e:
            console.print(f"[bold red]{e}[/bold red]")
            raise typer.Exit(code=1) from e

        with AnkiClient.from_config(config) as client:
            ok = update_note_type(client, config.anki_note_type)
        if not ok:
            console.print("[bold red]Template update failed.[/bold red]")
            raise typer.Exit(code=1)
        console.print(
            f"[bold green]Note type '{config.anki_note_type}' updated.[/bold green]"
        )
