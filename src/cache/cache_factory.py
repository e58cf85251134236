# src/cache/cache_factory.py
"""Factory for document store instantiation."""

from __future__ import annotations

from waldbrandindex.cache.base_cache_store import BaseDocumentStore, Clock
from waldbrandindex.config.settings import Settings


def create_document_store(
    settings: Settings | None = None,
    clock: Clock | None = None,
) -> BaseDocumentStore:
    """Instantiate the configured store backend.

    Args:
        settings: Application settings. Defaults to the file backend at the
            default cache path.
        clock: Optional time source, mainly for tests.

    Returns:
        Configured BaseDocumentStore implementation.
    """
    settings = settings or Settings()
    backend = settings.cache_backend

    if backend == "file":
        from waldbrandindex.cache.file_store import FileDocumentStore
        return FileDocumentStore(path=settings.cache_path, clock=clock)

    if backend == "memory":
        from waldbrandindex.cache.memory_store import MemoryDocumentStore
        return MemoryDocumentStore(clock=clock)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
