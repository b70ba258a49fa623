"""Exceptions raised by code-cloze.

    CodeClozeError
     ConfigurationError   bad config file or settings
     AnkiError
        AnkiConnectError  a single AnkiConnect call failed
     SynthesisError
        ParseError        no grammar or lexer, or the parser gave up

Only the HTTP layer raises AnkiConnectError. ``AnkiClient`` logs it and
returns an absent result instead, so one failed call never stops a run.

    try:
        config = load_config(path)
    except ConfigurationError as e:
        console.print(str(e))  # message plus "Suggestion: ..." line
"""

from typing import Any


class CodeClozeError(Exception):
    """Root of the code-cloze exception tree.

    Attributes:
        message: What went wrong, for humans
        suggestion: How to fix it, when we know
        error_code: Stable identifier such as ``"ANKI-CONNECT-001"``
        context: Extra values worth logging (URL, language, action, ...)
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        self.context = dict(context) if context else {}
        super().__init__(self._render())

    def _render(self) -> str:
        text = f"[{self.error_code}] {self.message}" if self.error_code else self.message
        if self.suggestion:
            text += f"\nSuggestion: {self.suggestion}"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Fields for structured log events."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


class ConfigurationError(CodeClozeError):
    """Config file unreadable or malformed, or a setting out of range.

    Also raised for an unsupported source language or an unknown
    Pygments style.
    """


class AnkiError(CodeClozeError):
    """Anything that went wrong talking to Anki."""


class AnkiConnectError(AnkiError):
    """An AnkiConnect request failed.

    Covers Anki not running, the add-on missing, HTTP or JSON problems,
    and a non-null ``error`` in the response envelope.
    """


class SynthesisError(CodeClozeError):
    """Cards could not be built from the source."""


class ParseError(SynthesisError):
    """No tree-sitter grammar or Pygments lexer for the language, or parsing failed."""


__all__ = [
    "AnkiConnectError",
    "AnkiError",
    "CodeClozeError",
    "ConfigurationError",
    "ParseError",
    "SynthesisError",
]
