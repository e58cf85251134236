# src/cache/memory_store.py
"""Process-local document store (CACHE_BACKEND=memory).

Nothing survives a restart; used for tests and embedding hosts that manage
their own persistence.
"""

from __future__ import annotations

import logging

from waldbrandindex.cache.base_cache_store import BaseDocumentStore, Clock
from waldbrandindex.cache.models import CachedDocument

logger = logging.getLogger(__name__)


class MemoryDocumentStore(BaseDocumentStore):
    """Keeps the cached document in memory."""

    def __init__(
        self,
        clock: Clock | None = None,
        initial: CachedDocument | None = None,
    ) -> None:
        super().__init__(clock)
        self._document = initial

    def current(self) -> CachedDocument | None:
        return self._document

    def replace(self, raw_bytes: bytes) -> CachedDocument:
        if not raw_bytes:
            raise ValueError("Refusing to cache an empty document")
        document = CachedDocument(
            raw_bytes=bytes(raw_bytes), fetched_at=self._next_fetched_at()
        )
        self._document = document
        logger.debug("Cached %d bytes in memory", document.size_bytes)
        return document
