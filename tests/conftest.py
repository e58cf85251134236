# tests/conftest.py
"""Shared test fixtures for all unit and integration tests."""

from __future__ import annotations

import logging

import pytest

from tests.support import FakeClock
from waldbrandindex.cache.file_store import FileDocumentStore
from waldbrandindex.cache.memory_store import MemoryDocumentStore
from waldbrandindex.logging.context import clear_context


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryDocumentStore:
    return MemoryDocumentStore(clock=clock)


@pytest.fixture
def file_store(tmp_path, clock: FakeClock) -> FileDocumentStore:
    return FileDocumentStore(path=tmp_path / ".cache" / "wgs_cache.xml", clock=clock)


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    root = logging.getLogger("waldbrandindex")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
