"""Runtime settings loaded from the environment.

Every setting is optional; defaults reproduce the stock behaviour of
wrapping ``age`` and looking keys up on github.com.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from age_github.infra.disk_cache import user_cache_dir
from age_github.utils.constants import DEFAULT_BINARY, DEFAULT_KEYS_URL

logger = logging.getLogger(__name__)

CACHE_SUBDIR: str = "age-github"
"""Name of the cache directory created under the user cache root."""

_TRUE_VALUES = frozenset(("1", "true", "yes"))
_FALSE_VALUES = frozenset(("0", "false", "no"))


def _parse_bool(value: str, default: bool) -> bool:
    """Parse a boolean environment variable with explicit default.

    Unrecognised values fall back to *default* and are logged.
    """
    normalized = value.strip().lower()
    if not normalized:
        return default
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    logger.warning("Unrecognised boolean value %r, using %s", value, default)
    return default


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved runtime configuration."""

    binary: str = DEFAULT_BINARY
    """Executable name (searched on PATH) or explicit path of age."""

    keys_url: str = DEFAULT_KEYS_URL
    """Base URL serving ``/<handle>.keys`` listings."""

    cache_dir: Path | None = None
    """Directory for cached key listings; ``None`` disables caching."""

    debug: bool = False
    """Emit debug logging to stderr."""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        if "AGE_GITHUB_CACHE_DIR" in env:
            raw_dir = env["AGE_GITHUB_CACHE_DIR"]
            cache_dir = Path(raw_dir) if raw_dir else None
        else:
            root = user_cache_dir(env)
            cache_dir = root / CACHE_SUBDIR if root is not None else None

        return cls(
            binary=env.get("AGE_GITHUB_BINARY") or DEFAULT_BINARY,
            keys_url=(env.get("AGE_GITHUB_KEYS_URL") or DEFAULT_KEYS_URL).rstrip("/"),
            cache_dir=cache_dir,
            debug=_parse_bool(env.get("AGE_GITHUB_DEBUG", ""), default=False),
        )
