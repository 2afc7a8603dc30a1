"""Fixed limits and well-known strings shared across layers."""

from __future__ import annotations

from age_github.version import __version__

RECIPIENT_FLAGS: frozenset[str] = frozenset(("-r", "--r", "-recipient", "--recipient"))
"""Flag spellings whose value names an age recipient."""

REPLACEMENT_FLAG: str = "-r"
"""Flag emitted in front of keys substituted from ``flag=@handle`` tokens."""

HANDLE_PREFIX: str = "@"
"""Marks a recipient value as a GitHub handle rather than a key."""

HANDLE_PATTERN: str = r"^[A-Za-z][A-Za-z0-9_-]+$"

KEY_PREFIX: str = "ssh-"
"""Only listing lines starting with this prefix are treated as keys."""

MAX_KEYS: int = 10
MAX_BODY_BYTES: int = 1 << 18
FETCH_TIMEOUT: float = 10.0
"""Per-handle network budget, in seconds."""

CACHE_TTL: float = 60 * 60
"""Seconds after which a cached listing is considered stale."""

USER_AGENT: str = f"age-github/{__version__}"

DEFAULT_BINARY: str = "age"
DEFAULT_KEYS_URL: str = "https://github.com"
