"""Interface for HTTP communication with AnkiConnect."""

from abc import ABC, abstractmethod
from typing import Any


class IAnkiHttpClient(ABC):
    """Interface for the low-level AnkiConnect request/response cycle."""

    @abstractmethod
    def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        """Invoke an AnkiConnect action.

        Args:
            action: Action name
            params: Action parameters

        Returns:
            Action result

        Raises:
            AnkiConnectError: If the action fails
        """

    @abstractmethod
    def close(self) -> None:
        """Close HTTP sessions and cleanup resources."""
