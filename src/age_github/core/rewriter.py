"""Core argument rewriter — substitutes ``@handle`` recipients with keys.

Two recipient spellings are recognised:

* ``-r @alice``: the handle token is replaced in place by the key.
* ``-r=@alice``: the token is replaced by two tokens, ``-r`` and the
  key, since age does not accept the ``=`` form itself.

Every other token is forwarded untouched and in order.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from age_github.core.protocols import Resolver
from age_github.exceptions import AgeGithubError, NoKeysFoundError
from age_github.utils.constants import HANDLE_PREFIX, RECIPIENT_FLAGS, REPLACEMENT_FLAG


def quote(value: str) -> str:
    """Double-quote *value*, escaping quotes, backslashes and control characters."""
    return json.dumps(value, ensure_ascii=False)


def is_recipient_flag(token: str) -> bool:
    """Return ``True`` for an exact recipient-flag spelling."""
    return token in RECIPIENT_FLAGS


class ArgumentRewriter:
    """Rewrite an age argument vector, resolving handles via *resolver*."""

    def __init__(self, resolver: Resolver) -> None:
        self._resolver: Resolver = resolver

    def rewrite(self, binary_path: str, argv: Sequence[str]) -> list[str]:
        """Return the argument vector to exec, starting with *binary_path*.

        Raises
        ------
        NoKeysFoundError
            When a handle resolves to an empty key list.
        InvalidHandleError, KeyFetchError
            Re-raised from the resolver with the handle named in the
            message.  The first failure aborts the whole rewrite.
        """
        out: list[str] = [binary_path]
        for i, token in enumerate(argv):
            if token.startswith(HANDLE_PREFIX) and i > 0 and is_recipient_flag(argv[i - 1]):
                out.append(self._first_key(token[1:]))
                continue

            flag, sep, value = token.partition("=")
            if sep and flag and is_recipient_flag(flag):
                if not value.startswith(HANDLE_PREFIX):
                    out.append(token)
                    continue
                out.extend((REPLACEMENT_FLAG, self._first_key(value[1:])))
                continue

            out.append(token)
        return out

    def _first_key(self, handle: str) -> str:
        try:
            keys = self._resolver.resolve(handle)
        except AgeGithubError as exc:
            raise type(exc)(
                f"fetching keys for github user {quote(handle)}: {exc}",
                hint=exc.hint,
            ) from exc
        if keys.first is None:
            raise NoKeysFoundError(f"no keys found for github user {quote(handle)}")
        return keys.first
