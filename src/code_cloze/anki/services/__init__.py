"""Anki services."""

from .anki_deck_service import AnkiDeckService
from .anki_http_client import AnkiHttpClient
from .anki_model_service import AnkiModelService
from .anki_note_service import AnkiNoteService

__all__ = [
    "AnkiDeckService",
    "AnkiHttpClient",
    "AnkiModelService",
    "AnkiNoteService",
]
