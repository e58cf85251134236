# src/api/facade.py
"""Public API facade: build and initialize an IndexService from settings.

Usage:
    from waldbrandindex.api.facade import open_index

    with open_index() as index:
        risk = index.lookup("Barnim")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from waldbrandindex.api.service import IndexService
from waldbrandindex.cache.cache_factory import create_document_store
from waldbrandindex.config.settings import Settings
from waldbrandindex.fetching.http_fetcher import HttpFetcher

if TYPE_CHECKING:
    from waldbrandindex.cache.base_cache_store import BaseDocumentStore, Clock
    from waldbrandindex.fetching.base_fetcher import BaseFetcher

logger = logging.getLogger(__name__)


def build_index(
    settings: Settings | None = None,
    store: BaseDocumentStore | None = None,
    fetcher: BaseFetcher | None = None,
    clock: Clock | None = None,
) -> IndexService:
    """Wire an IndexService without touching the network or the cache.

    Args:
        settings: Global settings. Loaded from .env if None.
        store: Document store. Built from settings if None.
        fetcher: Fetcher. An HttpFetcher from settings if None.
        clock: Optional time source shared by store and service.
    """
    settings = settings or Settings()
    store = store or create_document_store(settings, clock=clock)
    fetcher = fetcher or HttpFetcher.from_settings(settings)
    return IndexService(
        store=store,
        fetcher=fetcher,
        source_url=settings.source_url,
        cache_ttl=settings.cache_ttl,
        clock=clock,
    )


def open_index(
    settings: Settings | None = None,
    store: BaseDocumentStore | None = None,
    fetcher: BaseFetcher | None = None,
    clock: Clock | None = None,
) -> IndexService:
    """Build an IndexService and initialize it.

    Raises:
        IndexUnavailableError: If there is nothing to serve.
    """
    service = build_index(settings, store=store, fetcher=fetcher, clock=clock)
    try:
        report = service.initialize()
    except Exception:
        service.close()
        raise
    if report.degraded:
        logger.warning("Index initialized from stale cache: %s", report.fetch_error)
    return service
