"""Domain models for age-github.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and validation.  They carry zero I/O and
must remain pure across the entire lifecycle.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from age_github.exceptions import InvalidHandleError
from age_github.utils.constants import HANDLE_PATTERN


# ---------------------------------------------------------------------------
# Handle grammar
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HandleGrammar:
    """Compiled grammar for GitHub user handles.

    The pattern is compiled once at construction; :meth:`matches` is a
    pure predicate.
    """

    pattern: str
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def matches(self, value: str) -> bool:
        return self._compiled.fullmatch(value) is not None


HANDLE_GRAMMAR = HandleGrammar(HANDLE_PATTERN)


def validate_handle(handle: str) -> str:
    """Return *handle* unchanged or raise :class:`InvalidHandleError`."""
    if not HANDLE_GRAMMAR.matches(handle):
        raise InvalidHandleError(
            "not a valid github user name",
            hint="Handles start with a letter followed by letters, digits, '-' or '_'.",
        )
    return handle


# ---------------------------------------------------------------------------
# Resolved keys
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class KeyList:
    """Ordered candidate public keys for one handle.

    The first entry is the one substituted into the argument vector.
    An empty list is a valid value; callers decide whether it is fatal.
    """

    keys: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.keys)

    def __bool__(self) -> bool:
        return len(self.keys) > 0

    @property
    def first(self) -> str | None:
        """The preferred key, or ``None`` when the list is empty."""
        return self.keys[0] if self.keys else None
