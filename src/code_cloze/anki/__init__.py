"""AnkiConnect client and note type definition."""

from .client import AnkiClient

__all__ = ["AnkiClient"]
