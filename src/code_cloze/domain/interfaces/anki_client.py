"""Interface for the Anki operations card generation depends on."""

from abc import ABC, abstractmethod


class IAnkiClient(ABC):
    """Best-effort flashcard sink.

    Implementations never raise for backend failures. A failed call
    returns ``None`` (or ``False``) so callers can keep going.
    """

    @abstractmethod
    def check_connection(self) -> int | None:
        """Probe the backend.

        Returns:
            AnkiConnect API version, or None if the backend is unreachable
        """

    @abstractmethod
    def ensure_deck(self, deck_name: str) -> bool:
        """Create the deck if it does not exist."""

    @abstractmethod
    def ensure_note_type(self, model_name: str) -> bool:
        """Create the cloze note type or overwrite its templates and styling."""

    @abstractmethod
    def add_note(
        self,
        deck_name: str,
        model_name: str,
        text: str,
        tags: list[str],
    ) -> int | None:
        """Add a cloze note.

        Returns:
            The new note ID, or None if the note was not added
        """

    @abstractmethod
    def close(self) -> None:
        """Release any held resources."""
