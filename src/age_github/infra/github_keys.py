"""httpx backed implementation of :class:`~age_github.core.protocols.KeySource`.

This module is the **only** place in the codebase that imports ``httpx``.
All httpx exceptions are caught here and re-raised as
:class:`~age_github.exceptions.KeyFetchError` — nothing raw escapes the
infrastructure boundary.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
from collections.abc import Callable, Iterator
from typing import Any

import httpx

from age_github.exceptions import KeyFetchError
from age_github.utils.constants import (
    DEFAULT_KEYS_URL,
    FETCH_TIMEOUT,
    MAX_BODY_BYTES,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

_EXPECTED_CONTENT_TYPE = "text/plain"


class GithubKeySource:
    """Fetch ``<base_url>/<handle>.keys`` listings over HTTPS.

    Usage::

        source = GithubKeySource()
        payload = source.fetch("octocat")

    Parameters
    ----------
    base_url:
        Host serving the listings, without a trailing slash.
    timeout:
        Overall budget in seconds for one :meth:`fetch`, body included.
    max_bytes:
        Body bytes kept; anything past the cap is dropped silently.
    client:
        Optional pre-built :class:`httpx.Client`.  When omitted a client
        is created and closed per fetch.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_KEYS_URL,
        *,
        timeout: float = FETCH_TIMEOUT,
        max_bytes: int = MAX_BODY_BYTES,
        client: httpx.Client | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._base_url: str = base_url.rstrip("/")
        self._timeout: float = timeout
        self._max_bytes: int = max_bytes
        self._client: httpx.Client | None = client
        self._clock: Callable[[], float] = clock

    def url_for(self, handle: str) -> str:
        return f"{self._base_url}/{handle}.keys"

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch(self, handle: str) -> bytes:
        """Return the raw listing for *handle*, at most ``max_bytes`` long.

        Connecting, headers and body together must finish within
        ``timeout`` seconds of wall-clock time.

        Raises
        ------
        KeyFetchError
            On transport errors, timeouts, a non-200 status or a
            non ``text/plain`` content type.
        """
        url = self.url_for(handle)
        deadline = self._clock() + self._timeout
        logger.debug("Fetching %s", url)

        outcome: dict[str, Any] = {}
        done = threading.Event()

        def _worker() -> None:
            try:
                outcome["payload"] = self._fetch_before(url, deadline)
            except Exception as exc:  # noqa: BLE001 - re-raised by the caller
                outcome["error"] = exc
            finally:
                done.set()

        # The request thread is abandoned once the budget is spent.
        threading.Thread(target=_worker, name=f"fetch-{handle}", daemon=True).start()
        if not done.wait(self._timeout):
            raise self._timed_out(url)
        if "error" in outcome:
            raise outcome["error"]
        return outcome["payload"]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fetch_before(self, url: str, deadline: float) -> bytes:
        try:
            with self._open_client() as client:
                with client.stream(
                    "GET",
                    url,
                    headers={"User-Agent": USER_AGENT},
                    timeout=self._timeout,
                ) as response:
                    self._check_response(response)
                    return self._read_capped(response.iter_bytes(), deadline)
        except httpx.TimeoutException as exc:
            raise self._timed_out(url) from exc
        except httpx.HTTPError as exc:
            raise KeyFetchError(f"request to {url} failed: {exc}") from exc

    def _timed_out(self, url: str) -> KeyFetchError:
        return KeyFetchError(
            f"request to {url} timed out after {self._timeout:g}s",
            hint="Check your network connection and try again.",
        )

    def _open_client(self) -> contextlib.AbstractContextManager[httpx.Client]:
        if self._client is not None:
            return contextlib.nullcontext(self._client)
        return httpx.Client(timeout=self._timeout, follow_redirects=True)

    @staticmethod
    def _check_response(response: httpx.Response) -> None:
        logger.debug("Got %s from %s", response.status_code, response.url)
        if response.status_code != httpx.codes.OK:
            raise KeyFetchError(
                f"unexpected response code \"{response.status_code} {response.reason_phrase}\"",
            )
        content_type = response.headers.get("Content-Type", "")
        if not content_type.startswith(_EXPECTED_CONTENT_TYPE):
            raise KeyFetchError(f"unexpected content type \"{content_type}\"")

    def _read_capped(self, chunks: Iterator[bytes], deadline: float) -> bytes:
        buf = bytearray()
        for chunk in chunks:
            if self._clock() > deadline:
                raise httpx.ReadTimeout("key listing download exceeded its deadline")
            buf += chunk[: self._max_bytes - len(buf)]
            if len(buf) >= self._max_bytes:
                logger.debug("Key listing truncated at %d bytes", self._max_bytes)
                break
        return bytes(buf)
