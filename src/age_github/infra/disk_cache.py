"""Infrastructure: on-disk cache of raw key listings.

One file per handle, named by the SHA-1 hex digest of the handle, holding
the payload exactly as fetched.  Freshness is judged from the file's
modification time; nothing is ever deleted, stale entries are simply
ignored until overwritten.

Rules
-----
* No locking; with concurrent writers the last one wins.
* :meth:`DiskCache.get` never raises.
* :meth:`DiskCache.put` raises ``OSError``; callers treat it as best effort.
"""

from __future__ import annotations

import hashlib
import logging
import os
import sys
import time
from collections.abc import Callable, Mapping
from pathlib import Path

from age_github.utils.constants import CACHE_TTL

logger = logging.getLogger(__name__)

_DIR_MODE = 0o777
_FILE_MODE = 0o666


# ---------------------------------------------------------------------------
# Cache root discovery
# ---------------------------------------------------------------------------

def user_cache_dir(environ: Mapping[str, str] | None = None) -> Path | None:
    """Return the per-user cache root for this platform, or ``None``.

    Linux/BSD honour ``$XDG_CACHE_HOME`` (absolute paths only) before
    ``~/.cache``; macOS uses ``~/Library/Caches``; Windows uses
    ``%LocalAppData%``.
    """
    env = os.environ if environ is None else environ

    if sys.platform == "win32":
        local = env.get("LocalAppData") or env.get("LOCALAPPDATA")
        return Path(local) if local else None

    if sys.platform == "darwin":
        home = env.get("HOME")
        return Path(home) / "Library" / "Caches" if home else None

    xdg = env.get("XDG_CACHE_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    home = env.get("HOME")
    return Path(home) / ".cache" if home else None


def cache_filename(handle: str) -> str:
    """Return the on-disk filename used for *handle*."""
    return hashlib.sha1(handle.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

class DiskCache:
    """Concrete :class:`~age_github.core.protocols.KeyCache` over a directory.

    A ``None`` *base_path* yields a disabled cache: every lookup misses
    and every store is a no-op.
    """

    def __init__(
        self,
        base_path: Path | None,
        *,
        ttl: float = CACHE_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._base_path: Path | None = base_path
        self._ttl: float = ttl
        self._clock: Callable[[], float] = clock

    @property
    def base_path(self) -> Path | None:
        return self._base_path

    def path_for(self, handle: str) -> Path | None:
        if self._base_path is None:
            return None
        return self._base_path / cache_filename(handle)

    def get(self, handle: str) -> bytes | None:
        path = self.path_for(handle)
        if path is None:
            return None
        try:
            mtime = path.stat().st_mtime
            if mtime + self._ttl < self._clock():
                logger.debug("Cache entry %s is stale", path)
                return None
            return path.read_bytes()
        except OSError as exc:
            logger.debug("Cache miss for %s: %s", handle, exc)
            return None

    def put(self, handle: str, payload: bytes) -> None:
        path = self.path_for(handle)
        if path is None:
            return
        path.parent.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
        fd = os.open(path, flags, _FILE_MODE)
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload)
        logger.debug("Cached %d bytes for %s at %s", len(payload), handle, path)
