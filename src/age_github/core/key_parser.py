"""Extraction of SSH public keys from a ``.keys`` listing payload.

Pure functions only. The payload has already been fetched (and capped)
by the infrastructure layer or read back from the cache.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from age_github.core.models import KeyList
from age_github.utils.constants import KEY_PREFIX, MAX_KEYS


def iter_lines(payload: bytes) -> Iterator[str]:
    """Yield the text lines of *payload*.

    Lines are split on ``\\n`` with a trailing ``\\r`` dropped; a final
    line without a terminator is still yielded.  Undecodable bytes survive
    as surrogates, so :func:`os.fsencode` restores them for ``execve``.
    """
    lines = payload.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    for raw in lines:
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        yield raw.decode("utf-8", errors="surrogateescape")


def select_keys(lines: Iterable[str], *, limit: int = MAX_KEYS) -> KeyList:
    """Collect at most *limit* lines starting with ``ssh-``, in order."""
    found: list[str] = []
    for line in lines:
        if len(found) == limit:
            break
        if line.startswith(KEY_PREFIX):
            found.append(line)
    return KeyList(keys=tuple(found))


def parse_keys(payload: bytes) -> KeyList:
    """Parse a raw listing payload into a :class:`KeyList`."""
    return select_keys(iter_lines(payload))
