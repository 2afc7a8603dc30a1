"""Core key resolver — maps a GitHub handle to candidate SSH keys.

The resolver consults the :class:`~age_github.core.protocols.KeyCache`
before the :class:`~age_github.core.protocols.KeySource`, and stores
fresh listings back into the cache.

Guarantees
----------
* Invalid handles are rejected before the cache or network is touched.
* Cache hits are trusted as-is; there is no revalidation round-trip.
* Cache write failures never abort resolution.
"""

from __future__ import annotations

import logging

from age_github.core.key_parser import parse_keys
from age_github.core.models import KeyList, validate_handle
from age_github.core.protocols import KeyCache, KeySource

logger = logging.getLogger(__name__)


class KeyResolver:
    """Resolve handles through a cache-then-network pipeline.

    Parameters
    ----------
    cache:
        Any object satisfying the :class:`KeyCache` protocol.
    source:
        Any object satisfying the :class:`KeySource` protocol.
    """

    def __init__(self, cache: KeyCache, source: KeySource) -> None:
        self._cache: KeyCache = cache
        self._source: KeySource = source

    def resolve(self, handle: str) -> KeyList:
        """Return the keys published by *handle* (possibly empty).

        Raises
        ------
        InvalidHandleError
            When *handle* does not match the handle grammar.
        KeyFetchError
            When the listing cannot be fetched from the network.
        """
        validate_handle(handle)

        cached = self._cache.get(handle)
        if cached is not None:
            logger.debug("Using cached key listing for %s", handle)
            return parse_keys(cached)

        payload = self._source.fetch(handle)
        keys = parse_keys(payload)
        try:
            self._cache.put(handle, payload)
        except OSError as exc:
            logger.debug("Could not cache key listing for %s: %s", handle, exc)
        return keys
