"""Shared pytest fixtures and configuration for the age-github test suite.

Guidelines
----------
* No internet access in any test — httpx is driven by ``MockTransport``.
* ``os.execve`` is always patched; no test replaces the pytest process.
* Core tests must be pure — resolvers and caches are faked in memory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from age_github.core.models import KeyList


class FakeCache:
    """In-memory :class:`~age_github.core.protocols.KeyCache`."""

    def __init__(self, entries: dict[str, bytes] | None = None, *, fail_put: bool = False) -> None:
        self.entries: dict[str, bytes] = dict(entries or {})
        self.fail_put = fail_put
        self.gets: list[str] = []

    def get(self, handle: str) -> bytes | None:
        self.gets.append(handle)
        return self.entries.get(handle)

    def put(self, handle: str, payload: bytes) -> None:
        if self.fail_put:
            raise PermissionError("read-only cache")
        self.entries[handle] = payload


class FakeSource:
    """In-memory :class:`~age_github.core.protocols.KeySource`."""

    def __init__(self, payloads: dict[str, bytes] | None = None, error: Exception | None = None) -> None:
        self.payloads: dict[str, bytes] = dict(payloads or {})
        self.error = error
        self.calls: list[str] = []

    def fetch(self, handle: str) -> bytes:
        self.calls.append(handle)
        if self.error is not None:
            raise self.error
        return self.payloads[handle]


class FakeResolver:
    """In-memory :class:`~age_github.core.protocols.Resolver`."""

    def __init__(self, keys: dict[str, list[str]] | None = None, error: Exception | None = None) -> None:
        self.keys = dict(keys or {})
        self.error = error
        self.calls: list[str] = []

    def resolve(self, handle: str) -> KeyList:
        self.calls.append(handle)
        if self.error is not None:
            raise self.error
        return KeyList(keys=tuple(self.keys.get(handle, ())))


@pytest.fixture(autouse=True)
def _isolate_package_logger() -> Iterator[None]:
    """Drop handlers ``configure_logging`` may attach during a test."""
    package_logger = logging.getLogger("age_github")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
