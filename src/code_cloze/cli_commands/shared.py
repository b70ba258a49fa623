"""Shared utilities for CLI commands."""

from pathlib import Path
from typing import Any

from rich.console import Console

from code_cloze.config import Config, load_config, set_config
from code_cloze.utils.logging import configure_logging, get_logger

# Shared console for all commands
console = Console()


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
    verbose: bool = False,
) -> tuple[Config, Any]:
    """Load configuration and configure logging for a command.

    Args:
        config_path: Optional path to config file
        log_level: Logging level (the configured level when None)
        verbose: Show all log messages on terminal

    Returns:
        Tuple of (Config, Logger)
    """
    config = load_config(config_path)
    set_config(config)
    configure_logging(log_level or config.log_level, log_dir=config.log_dir, verbose=verbose)
    return config, get_logger("cli")
