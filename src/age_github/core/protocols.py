"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can substitute in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol

from age_github.core.models import KeyList


class KeyCache(Protocol):
    """Contract for raw key-listing caches keyed by handle."""

    def get(self, handle: str) -> bytes | None:
        """Return the cached payload for *handle*, or ``None`` on a miss.

        Stale and unreadable entries are misses.  Never raises.
        """
        ...  # pragma: no cover

    def put(self, handle: str, payload: bytes) -> None:
        """Store *payload* for *handle*.

        Best effort: implementations may raise ``OSError``; the resolver
        swallows it.
        """
        ...  # pragma: no cover


class KeySource(Protocol):
    """Contract for remote key-listing backends."""

    def fetch(self, handle: str) -> bytes:
        """Fetch the raw listing for *handle*, capped in size.

        Raises
        ------
        KeyFetchError
            On transport failure, timeout, unexpected status or
            unexpected content type.
        """
        ...  # pragma: no cover


class Resolver(Protocol):
    """Contract consumed by the argument rewriter."""

    def resolve(self, handle: str) -> KeyList:
        ...  # pragma: no cover
