"""Service for Anki note operations."""

from typing import Any, cast

from code_cloze.anki.note_type import FIELD_NAME
from code_cloze.domain.interfaces.anki_http_client import IAnkiHttpClient
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiNoteService:
    """Service for adding cloze notes."""

    def __init__(self, http_client: IAnkiHttpClient):
        self._http_client = http_client
        logger.debug("anki_note_service_initialized")

    def _build_note_payload(
        self,
        deck_name: str,
        model_name: str,
        text: str,
        tags: list[str | None] | None = None,
    ) -> dict[str, Any]:
        """Build note payload for API calls.

        Duplicates are always allowed so the same file can be submitted again.
        """
        note_payload: dict[str, Any] = {
            "deckName": deck_name,
            "modelName": model_name,
            "fields": {FIELD_NAME: text},
            "options": {"allowDuplicate": True},
            "tags": [],
        }
        if tags:
            note_payload["tags"] = [t for t in tags if t]
        return note_payload

    def add_note(
        self,
        deck_name: str,
        model_name: str,
        text: str,
        tags: list[str | None] | None = None,
    ) -> int:
        """Add a note and return its ID."""
        payload = self._build_note_payload(deck_name, model_name, text, tags)
        note_id = cast("int", self._http_client.invoke("addNote", {"note": payload}))
        logger.debug("note_created", note_id=note_id, deck=deck_name)
        return note_id
