"""Domain interfaces."""

from .anki_client import IAnkiClient
from .anki_http_client import IAnkiHttpClient

__all__ = ["IAnkiClient", "IAnkiHttpClient"]
