# src/api/service.py
"""IndexService: cache-refresh orchestration and the read-only query API.

Lifecycle: ``initialize()`` once, then many reads, with an occasional
``refresh()`` / ``force_refresh()``. Readers work on an immutable
IndexSnapshot that is replaced in a single assignment after a complete
parse, so a failing refresh never leaves a partial map behind.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from types import TracebackType

from waldbrandindex.api.models import IndexState, RefreshReport
from waldbrandindex.cache.base_cache_store import BaseDocumentStore, Clock, utc_now
from waldbrandindex.core.errors import IndexUnavailableError, ParseError
from waldbrandindex.core.models import IndexSnapshot, RiskDescriptor
from waldbrandindex.core.risk_catalog import describe_level
from waldbrandindex.fetching.base_fetcher import BaseFetcher
from waldbrandindex.fetching.models import FetchFailure
from waldbrandindex.logging.context import clear_context, set_refresh_context
from waldbrandindex.parsing.parser import parse_document

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = timedelta(hours=3)


class IndexService:
    """Serves per-district risk levels from the cached source document."""

    def __init__(
        self,
        store: BaseDocumentStore,
        fetcher: BaseFetcher,
        source_url: str,
        cache_ttl: timedelta = DEFAULT_CACHE_TTL,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._source_url = source_url
        self._cache_ttl = cache_ttl
        self._clock: Clock = clock or utc_now
        self._snapshot: IndexSnapshot | None = None

    # --- State ---

    @property
    def state(self) -> IndexState:
        if self._snapshot is None:
            return IndexState.UNINITIALIZED
        return IndexState.LOADED

    @property
    def snapshot(self) -> IndexSnapshot | None:
        return self._snapshot

    @property
    def source_url(self) -> str:
        return self._source_url

    @property
    def cache_ttl(self) -> timedelta:
        return self._cache_ttl

    # --- Refresh paths ---

    def initialize(self) -> RefreshReport:
        """Load the index, fetching first if the cache is stale or absent.

        Raises:
            IndexUnavailableError: If nothing is cached after the fetch
                attempt, or the cached document cannot be parsed.
        """
        return self._refresh(trigger="initialize", force=False)

    def refresh(self) -> RefreshReport:
        """Refetch only if the cache is stale, then reparse if needed."""
        return self._refresh(trigger="refresh", force=False)

    def force_refresh(self) -> RefreshReport:
        """Refetch and reparse regardless of cache age.

        A failed fetch keeps the old cache; a failed parse keeps the old map.
        """
        return self._refresh(trigger="force_refresh", force=True)

    def _refresh(self, trigger: str, force: bool) -> RefreshReport:
        set_refresh_context(trigger, self._source_url)
        try:
            report = RefreshReport(trigger=trigger)  # type: ignore[arg-type]

            if force or self._store.is_stale(self._cache_ttl):
                self._fetch_into_store(report)
            else:
                logger.debug("Cache is fresh (ttl=%s), skipping fetch", self._cache_ttl)

            document = self._store.current()
            if document is None:
                if self._snapshot is None:
                    raise IndexUnavailableError(
                        f"No cached document available and fetching {self._source_url} "
                        f"failed ({report.fetch_error or 'no fetch attempted'})"
                    )
                report.parse_error = "cache artifact missing"
                logger.error("Cache artifact disappeared, keeping previous index")
                return self._finish(report)

            current = self._snapshot
            if (
                not report.fetched
                and current is not None
                and current.source_fetched_at == document.fetched_at
            ):
                logger.debug("Index already built from the cached document")
                report.parsed = True
                return self._finish(report)

            try:
                parsed = parse_document(document.raw_bytes)
            except ParseError as e:
                if current is None:
                    raise IndexUnavailableError(
                        f"Cached document could not be parsed: {e}"
                    ) from e
                report.parse_error = str(e)
                logger.error("Parse failed, keeping previous index: %s", e)
                return self._finish(report)

            self._snapshot = IndexSnapshot(
                index=parsed,
                loaded_at=self._clock(),
                source_fetched_at=document.fetched_at,
            )
            report.parsed = True
            logger.info(
                "Index loaded: %d districts, last updated %s",
                len(parsed.districts),
                parsed.last_updated or "unknown",
            )
            return self._finish(report)
        finally:
            clear_context()

    def _fetch_into_store(self, report: RefreshReport) -> None:
        report.fetch_attempted = True
        outcome = self._fetcher.fetch(self._source_url)
        if isinstance(outcome, FetchFailure):
            report.fetch_error = str(outcome)
            logger.warning("Fetch failed, keeping cached document: %s", outcome)
            return
        try:
            self._store.replace(outcome)
        except OSError as e:
            report.fetch_error = f"cache write failed: {e}"
            logger.warning("Cache write failed, keeping cached document: %s", e)
            return
        report.fetched = True
        report.served_from = "network"

    def _finish(self, report: RefreshReport) -> RefreshReport:
        if self._snapshot is not None:
            report.district_count = len(self._snapshot.districts)
        return report

    # --- Queries ---

    def list_districts(self) -> list[str]:
        """District names in document order (empty before initialize())."""
        snapshot = self._snapshot
        if snapshot is None:
            return []
        return list(snapshot.districts)

    def lookup(self, district: str) -> RiskDescriptor | None:
        """Risk level with color and description, or None for unknown districts."""
        snapshot = self._snapshot
        if snapshot is None:
            return None
        level = snapshot.districts.get(district)
        if level is None:
            return None
        return describe_level(level)

    def lookup_all(self) -> dict[str, RiskDescriptor]:
        """Descriptors for every district, in document order."""
        snapshot = self._snapshot
        if snapshot is None:
            return {}
        return {name: describe_level(level) for name, level in snapshot.districts.items()}

    def last_updated_date(self) -> str | None:
        """Publication date reported by the source document, if any."""
        snapshot = self._snapshot
        if snapshot is None:
            return None
        return snapshot.last_updated

    # --- Resources ---

    def close(self) -> None:
        self._fetcher.close()

    def __enter__(self) -> IndexService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
