"""Settings model for code-cloze."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .exceptions import ConfigurationError

# Languages with both a tree-sitter grammar and a Pygments lexer we map nodes for
SUPPORTED_LANGUAGES = ("typescript", "tsx", "javascript")

DEFAULT_NOTE_TYPE = "anki-cloze-code"


class Config(BaseSettings):
    """Service configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CODE_CLOZE_",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Anki settings
    anki_connect_url: str = Field(
        default="http://127.0.0.1:8765", description="AnkiConnect URL"
    )
    anki_deck_name: str = Field(default="dev", description="Default Anki deck name")
    anki_note_type: str = Field(
        default=DEFAULT_NOTE_TYPE, description="Cloze note type owned by code-cloze"
    )
    default_tags: list[str] = Field(
        default_factory=lambda: [DEFAULT_NOTE_TYPE],
        description="Tags applied when a submission carries none",
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="AnkiConnect request timeout in seconds"
    )
    request_delay: float = Field(
        default=0.2,
        ge=0,
        description="Pause before every AnkiConnect call (0 disables it)",
    )

    # Synthesis settings
    max_blanks_per_card: int = Field(
        default=20, description="Maximum cloze blanks rendered active on one card"
    )
    language: str = Field(default="typescript", description="Source language")
    highlight_style: str = Field(default="monokai", description="Pygments style name")
    max_lines_per_chunk: int | None = Field(
        default=None, description="Split the source into chunks of this many lines"
    )
    context_lines: int | None = Field(
        default=None,
        description="Leading context lines per card (None renders the whole chunk)",
    )
    breadcrumb_depth: int | None = Field(
        default=None, description="Keep only the N innermost scope labels"
    )
    label_width: int = Field(
        default=40, description="Truncation width for unnamed scope labels"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_dir: Path | None = Field(
        default=None, description="Directory for JSON log files (console only if unset)"
    )

    @field_validator("default_tags", mode="before")
    @classmethod
    def parse_tags(cls, v: Any) -> list[str]:
        """Accept a comma separated string as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        if isinstance(v, list):
            return [str(t).strip() for t in v if str(t).strip()]
        msg = f"default_tags must be string or list, got {type(v).__name__}"
        raise ValueError(msg)

    @field_validator("log_dir", mode="before")
    @classmethod
    def parse_log_dir(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(str(v)).expanduser()

    @field_validator("language", mode="before")
    @classmethod
    def normalize_language(cls, v: Any) -> str:
        return str(v).strip().lower()

    @model_validator(mode="after")
    def validate_config(self) -> Config:
        """Validate configuration values after initialization."""
        if self.language not in SUPPORTED_LANGUAGES:
            msg = f"Unsupported language: {self.language}"
            raise ConfigurationError(
                msg,
                suggestion=f"Use one of: {', '.join(SUPPORTED_LANGUAGES)}",
            )

        try:
            get_style_by_name(self.highlight_style)
        except ClassNotFound as e:
            msg = f"Unknown highlight style: {self.highlight_style}"
            raise ConfigurationError(
                msg, suggestion="Run `pygmentize -L styles` to list available styles"
            ) from e

        if self.max_blanks_per_card < 1:
            msg = "max_blanks_per_card must be at least 1"
            raise ConfigurationError(msg, context={"value": self.max_blanks_per_card})

        for name in ("max_lines_per_chunk", "breadcrumb_depth"):
            value = getattr(self, name)
            if value is not None and value < 1:
                msg = f"{name} must be at least 1 when set"
                raise ConfigurationError(msg, context={"value": value})

        if self.context_lines is not None and self.context_lines < 0:
            msg = "context_lines cannot be negative"
            raise ConfigurationError(msg, context={"value": self.context_lines})

        if self.label_width < 4:
            msg = "label_width must be at least 4"
            raise ConfigurationError(msg, context={"value": self.label_width})

        return self


__all__ = ["DEFAULT_NOTE_TYPE", "SUPPORTED_LANGUAGES", "Config"]
