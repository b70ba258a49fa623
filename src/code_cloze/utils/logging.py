"""structlog setup for code-cloze.

Events go through the standard ``logging`` module so that third-party
libraries and our own loggers share handlers. The terminal shows a short
list of progress events; everything else goes to the optional JSON file.
"""

import logging
import sys
from collections.abc import MutableMapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer
from structlog.stdlib import (
    LoggerFactory,
    ProcessorFormatter,
    add_log_level,
    add_logger_name,
)

LOG_FILE_NAME = "code-cloze.log"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

# Shown on the terminal without --verbose, in addition to ERROR and above
USER_FACING_EVENTS: frozenset[str] = frozenset(
    {
        "generation_started",
        "generation_completed",
        "generation_failed",
        "anki_connection_failed",
        "note_type_updated",
    }
)

_configured = False
_installed: list[logging.Handler] = []


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _event_name(record: logging.LogRecord) -> str | None:
    # ProcessorFormatter.wrap_for_formatter stores the event dict as the message
    if isinstance(record.msg, dict):
        event = record.msg.get("event")
    else:
        event = record.getMessage()
    return event if isinstance(event, str) else None


class UserFacingConsoleFilter(logging.Filter):
    """Hide internal events from the terminal unless running verbose."""

    def __init__(self, verbose: bool = False) -> None:
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        if self.verbose or record.levelno >= logging.ERROR:
            return True
        return _event_name(record) in USER_FACING_EVENTS


class UserFriendlyConsoleRenderer:
    """One plain sentence per user-facing event."""

    def __init__(self) -> None:
        self._plain = ConsoleRenderer(
            colors=True, exception_formatter=structlog.dev.plain_traceback
        )
        self._messages = {
            "generation_started": self._started,
            "generation_completed": self._completed,
            "generation_failed": lambda ev: (
                f"Generation failed: {ev.get('error', 'unknown error')}"
            ),
            "anki_connection_failed": lambda ev: (
                f"Could not reach AnkiConnect at {ev.get('url', '')}"
            ),
            "note_type_updated": lambda ev: (
                f"Note type '{ev.get('model', '')}' is up to date"
            ),
        }

    @staticmethod
    def _started(ev: MutableMapping[str, Any]) -> str:
        title = ev.get("title") or "untitled"
        return f"Generating cloze cards for {title} into deck '{ev.get('deck', '')}'"

    @staticmethod
    def _completed(ev: MutableMapping[str, Any]) -> str:
        return f"Added {ev.get('added_count', 0)}/{ev.get('total_cards', 0)} cards"

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        message = self._messages.get(event_dict.get("event", ""))
        if message is not None:
            return message(event_dict)
        if str(event_dict.get("level", "")).lower() == "error":
            return f"ERROR: {event_dict.get('error', event_dict.get('event'))}"
        return str(self._plain(logger, method_name, event_dict))


def _pre_chain() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _console_handler(level: int, verbose: bool) -> logging.Handler:
    renderer: Any = (
        ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)
        if verbose
        else UserFriendlyConsoleRenderer()
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(UserFacingConsoleFilter(verbose=verbose))
    handler.setFormatter(
        ProcessorFormatter(processor=renderer, foreign_pre_chain=_pre_chain())
    )
    return handler


def _file_handler(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        ProcessorFormatter(processor=JSONRenderer(), foreign_pre_chain=_pre_chain())
    )
    return handler


def configure_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    verbose: bool = False,
) -> None:
    """Install the console handler and, with ``log_dir``, a rotating JSON file.

    Calling this again replaces the handlers installed by the previous call.
    """
    global _configured

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    while _installed:
        old = _installed.pop()
        root.removeHandler(old)
        old.close()

    structlog.configure(
        processors=[*_pre_chain(), ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _installed.append(_console_handler(_level_from_name(log_level), verbose))
    if log_dir is not None:
        _installed.append(_file_handler(log_dir))
    for handler in _installed:
        root.addHandler(handler)

    _configured = True
    get_logger(__name__).debug(
        "logging_configured",
        console_level=log_level,
        log_dir=str(log_dir) if log_dir else None,
        verbose=verbose,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger, configuring defaults on first use."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)
