"""Mock implementation of IAnkiClient for testing."""

from typing import Any

from code_cloze.domain.interfaces.anki_client import IAnkiClient


class MockAnkiClient(IAnkiClient):
    """Mock implementation of Anki client for testing.

    Records every call in order so tests can assert on the protocol
    a synthesis run follows, without a real AnkiConnect instance.
    """

    def __init__(
        self,
        connected: bool = True,
        fail_on_add: set[int] | None = None,
        deck_ok: bool = True,
        note_type_ok: bool = True,
    ):
        """Initialize mock client.

        Args:
            connected: Whether the version probe succeeds
            fail_on_add: 1-based add_note call numbers that fail
            deck_ok: Result of ensure_deck
            note_type_ok: Result of ensure_note_type
        """
        self.connected = connected
        self.fail_on_add = fail_on_add or set()
        self.deck_ok = deck_ok
        self.note_type_ok = note_type_ok
        self.calls: list[str] = []
        self.notes: list[dict[str, Any]] = []
        self.closed = False
        self._add_attempts = 0
        self._note_counter = 1000

    def check_connection(self) -> int | None:
        self.calls.append("check_connection")
        return 6 if self.connected else None

    def ensure_deck(self, deck_name: str) -> bool:
        self.calls.append("ensure_deck")
        return self.deck_ok

    def ensure_note_type(self, model_name: str) -> bool:
        self.calls.append("ensure_note_type")
        return self.note_type_ok

    def add_note(
        self,
        deck_name: str,
        model_name: str,
        text: str,
        tags: list[str],
    ) -> int | None:
        self.calls.append("add_note")
        self._add_attempts += 1
        if self._add_attempts in self.fail_on_add:
            return None
        self._note_counter += 1
        self.notes.append(
            {
                "noteId": self._note_counter,
                "deckName": deck_name,
                "modelName": model_name,
                "text": text,
                "tags": list(tags),
            }
        )
        return self._note_counter

    @property
    def add_note_calls(self) -> int:
        return self.calls.count("add_note")

    def close(self) -> None:
        self.closed = True
