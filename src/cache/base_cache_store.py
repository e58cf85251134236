# src/cache/base_cache_store.py
"""Abstract document store interface.

A store holds at most one document: the raw bytes of the last successful
fetch together with the fetch time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable

from waldbrandindex.cache.models import CachedDocument

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseDocumentStore(ABC):
    """Unified interface for document storage backends."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or utc_now

    def now(self) -> datetime:
        """Current time according to the store's clock."""
        return self._clock()

    @abstractmethod
    def current(self) -> CachedDocument | None:
        """Return the cached document, or None if never populated."""

    @abstractmethod
    def replace(self, raw_bytes: bytes) -> CachedDocument:
        """Atomically overwrite the stored document and stamp it with now."""

    def fetched_at(self) -> datetime | None:
        """Fetch time of the cached document, None if absent."""
        doc = self.current()
        return doc.fetched_at if doc is not None else None

    def is_stale(self, max_age: timedelta) -> bool:
        """True if no document exists or it is older than max_age."""
        fetched_at = self.fetched_at()
        if fetched_at is None:
            return True
        return self.now() - fetched_at > max_age

    def _next_fetched_at(self) -> datetime:
        """Fetch timestamp for a replacement; never earlier than the current one."""
        now = self.now()
        previous = self.fetched_at()
        if previous is not None and previous > now:
            return previous
        return now
