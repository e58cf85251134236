# src/cache/file_store.py
"""File-based document store (default CACHE_BACKEND=file).

The cache artifact is the raw upstream document; its mtime is the fetch time.
Replacement goes through a temp file in the same directory followed by
``os.replace``, so a reader sees either the old or the new document, never a
truncated one.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from waldbrandindex.cache.base_cache_store import BaseDocumentStore, Clock
from waldbrandindex.cache.models import CachedDocument

logger = logging.getLogger(__name__)


class FileDocumentStore(BaseDocumentStore):
    """Durable store backed by a single file."""

    def __init__(self, path: str | Path, clock: Clock | None = None) -> None:
        super().__init__(clock)
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def fetched_at(self) -> datetime | None:
        """Fetch time from the artifact's mtime (no content read)."""
        try:
            stat = self._path.stat()
        except FileNotFoundError:
            return None
        if stat.st_size == 0:
            return None
        return datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)

    def current(self) -> CachedDocument | None:
        """Read the cached document."""
        fetched_at = self.fetched_at()
        if fetched_at is None:
            return None
        try:
            raw = self._path.read_bytes()
        except OSError as e:
            logger.warning("Failed to read cache artifact %s: %s", self._path, e)
            return None
        if not raw:
            return None
        return CachedDocument(raw_bytes=raw, fetched_at=fetched_at)

    def replace(self, raw_bytes: bytes) -> CachedDocument:
        """Write raw_bytes to a temp file, stamp it and swap it into place."""
        if not raw_bytes:
            raise ValueError("Refusing to cache an empty document")

        fetched_at = self._next_fetched_at()
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(raw_bytes)
                fh.flush()
                os.fsync(fh.fileno())
            ts = fetched_at.timestamp()
            os.utime(tmp_path, (ts, ts))
            os.replace(tmp_path, self._path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info("Cache artifact replaced: %s (%d bytes)", self._path, len(raw_bytes))
        return CachedDocument(raw_bytes=bytes(raw_bytes), fetched_at=fetched_at)
