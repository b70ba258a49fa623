"""Blocking JSON-over-HTTP transport for AnkiConnect."""

import contextlib
import time
from collections.abc import Callable
from types import TracebackType
from typing import Any, Literal

import httpx

from code_cloze.domain.interfaces.anki_http_client import IAnkiHttpClient
from code_cloze.exceptions import AnkiConnectError
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)

ANKI_CONNECT_VERSION = 6


class AnkiHttpClient(IAnkiHttpClient):
    """Sends one AnkiConnect action per request.

    Requests are sequential, each preceded by ``request_delay`` seconds of
    sleep so a long run of ``addNote`` calls stays gentle on the add-on.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        request_delay: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            url: AnkiConnect endpoint
            timeout: Per-request timeout in seconds
            request_delay: Pause before each request; 0 turns it off
            sleep: Used for the pause (tests pass a recorder)
        """
        self.url = url
        self.request_delay = request_delay
        self._sleep = sleep
        # The add-on's server is happiest with a fresh connection per call
        self.session = httpx.Client(timeout=timeout, headers={"Connection": "close"})
        logger.debug(
            "anki_http_client_created",
            url=url,
            timeout=timeout,
            request_delay=request_delay,
        )

    def _post(self, action: str, payload: dict[str, Any]) -> httpx.Response:
        try:
            response = self.session.post(self.url, json=payload)
            response.raise_for_status()
        except (httpx.ConnectError, httpx.TimeoutException) as e:
            raise AnkiConnectError(
                f"AnkiConnect unreachable at {self.url}: {e}",
                suggestion=(
                    "Start Anki and make sure the AnkiConnect add-on is "
                    f"installed and listening on {self.url}."
                ),
                error_code="ANKI-CONNECT-001",
                context={"action": action, "url": self.url},
            ) from e
        except httpx.HTTPStatusError as e:
            raise AnkiConnectError(
                f"AnkiConnect answered HTTP {e.response.status_code} to {action}",
                context={"action": action},
            ) from e
        except httpx.HTTPError as e:
            raise AnkiConnectError(
                f"Request for {action} failed: {e}", context={"action": action}
            ) from e
        return response

    def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        """Run ``action`` and return the envelope's ``result``.

        Raises:
            AnkiConnectError: transport failure, a bad envelope, or a
                non-null ``error`` field
        """
        if self.request_delay > 0:
            self._sleep(self.request_delay)

        logger.debug("anki_invoke", action=action)
        response = self._post(
            action,
            {"action": action, "version": ANKI_CONNECT_VERSION, "params": params or {}},
        )

        try:
            envelope = response.json()
        except ValueError as e:
            raise AnkiConnectError(
                f"Invalid JSON in reply to {action}: {e}", context={"action": action}
            ) from e

        if not isinstance(envelope, dict) or not (
            "result" in envelope or "error" in envelope
        ):
            raise AnkiConnectError(
                f"Malformed response to {action}: {envelope!r}",
                context={"action": action},
            )
        if envelope.get("error") is not None:
            raise AnkiConnectError(
                f"AnkiConnect rejected {action}: {envelope['error']}",
                context={"action": action},
            )
        return envelope.get("result")

    def close(self) -> None:
        session = getattr(self, "session", None)
        if session is None or session.is_closed:
            return
        try:
            session.close()
        except httpx.HTTPError as e:
            logger.warning("anki_http_client_close_failed", url=self.url, error=str(e))
        else:
            logger.debug("anki_http_client_closed", url=self.url)

    def __enter__(self) -> "AnkiHttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        self.close()
        return False

    def __del__(self) -> None:
        session = getattr(self, "session", None)
        if session is not None:
            with contextlib.suppress(Exception):
                session.close()
