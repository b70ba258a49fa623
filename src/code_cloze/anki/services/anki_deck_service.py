"""Service for Anki deck operations."""

from typing import cast

from code_cloze.domain.interfaces.anki_http_client import IAnkiHttpClient
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiDeckService:
    """Service for Anki deck operations."""

    def __init__(self, http_client: IAnkiHttpClient):
        self._http_client = http_client
        logger.debug("anki_deck_service_initialized")

    def create_deck(self, deck_name: str) -> int:
        """Create a deck; AnkiConnect returns the existing ID if it already exists."""
        deck_id = cast(
            "int", self._http_client.invoke("createDeck", {"deck": deck_name})
        )
        logger.debug("deck_ensured", deck=deck_name, deck_id=deck_id)
        return deck_id
