"""AnkiConnect HTTP API client."""

from types import TracebackType
from typing import Any, Literal

from code_cloze.anki.services.anki_deck_service import AnkiDeckService
from code_cloze.anki.services.anki_http_client import AnkiHttpClient
from code_cloze.anki.services.anki_model_service import AnkiModelService
from code_cloze.anki.services.anki_note_service import AnkiNoteService
from code_cloze.domain.interfaces.anki_client import IAnkiClient
from code_cloze.domain.interfaces.anki_http_client import IAnkiHttpClient
from code_cloze.exceptions import AnkiConnectError
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiClient(IAnkiClient):
    """Best-effort facade over the AnkiConnect services.

    Every ``AnkiConnectError`` raised below this layer is logged and turned
    into an absent result, which is the only failure signal callers see.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        request_delay: float = 0.2,
        http_client: IAnkiHttpClient | None = None,
    ):
        """
        Initialize client.

        Args:
            url: AnkiConnect URL
            timeout: Request timeout in seconds
            request_delay: Seconds to wait before each request
            http_client: Pre-built HTTP client (mainly for tests)
        """
        self.url = url
        self._http_client = http_client or AnkiHttpClient(
            url, timeout=timeout, request_delay=request_delay
        )
        self._deck_service = AnkiDeckService(self._http_client)
        self._model_service = AnkiModelService(self._http_client)
        self._note_service = AnkiNoteService(self._http_client)
        logger.debug("anki_client_initialized", url=url)

    @classmethod
    def from_config(cls, config: Any) -> "AnkiClient":
        return cls(
            config.anki_connect_url,
            timeout=config.request_timeout,
            request_delay=config.request_delay,
        )

    def check_connection(self) -> int | None:
        try:
            version = self._http_client.invoke("version")
        except AnkiConnectError as e:
            logger.error("anki_connection_failed", url=self.url, error=str(e))
            return None
        if version is None:
            logger.error(
                "anki_connection_failed", url=self.url, error="empty version result"
            )
            return None
        logger.info("anki_connected", url=self.url, anki_connect_version=version)
        return int(version)

    def ensure_deck(self, deck_name: str) -> bool:
        try:
            self._deck_service.create_deck(deck_name)
        except AnkiConnectError as e:
            logger.warning("ensure_deck_failed", deck=deck_name, error=str(e))
            return False
        return True

    def ensure_note_type(self, model_name: str) -> bool:
        try:
            created = self._model_service.ensure_model(model_name)
        except AnkiConnectError as e:
            logger.warning("ensure_note_type_failed", model=model_name, error=str(e))
            return False
        logger.info("note_type_updated", model=model_name, created=created)
        return True

    def add_note(
        self,
        deck_name: str,
        model_name: str,
        text: str,
        tags: list[str],
    ) -> int | None:
        try:
            note_id = self._note_service.add_note(
                deck_name, model_name, text, list(tags)
            )
        except AnkiConnectError as e:
            logger.error("add_note_failed", deck=deck_name, error=str(e))
            return None
        if note_id is None:
            logger.error("add_note_failed", deck=deck_name, error="no note id")
            return None
        logger.info("note_added", note_id=note_id, deck=deck_name)
        return note_id

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> "AnkiClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        self.close()
        return False
