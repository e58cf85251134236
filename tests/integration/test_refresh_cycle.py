# tests/integration/test_refresh_cycle.py
"""End-to-end refresh cycle on a real cache file, across simulated restarts."""

from __future__ import annotations

import pytest

from tests.support import SAMPLE_XML, UPDATED_XML, FakeClock, ScriptedFetcher, offline
from waldbrandindex.api.facade import open_index
from waldbrandindex.config.settings import Settings
from waldbrandindex.core.errors import IndexUnavailableError


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        source_url="https://example.test/wgs.xml",
        cache_path=tmp_path / ".cache" / "wgs_cache.xml",
    )


class TestRefreshCycle:
    def test_restart_within_ttl_uses_cache(self, settings, clock):
        first = ScriptedFetcher(SAMPLE_XML)
        open_index(settings, fetcher=first, clock=clock).close()

        clock.advance(hours=2)
        second = ScriptedFetcher(UPDATED_XML)
        service = open_index(settings, fetcher=second, clock=clock)

        assert second.calls == []
        assert service.last_updated_date() == "2025-06-02"

    def test_restart_after_ttl_refetches(self, settings, clock):
        open_index(settings, fetcher=ScriptedFetcher(SAMPLE_XML), clock=clock).close()

        clock.advance(hours=3, minutes=1)
        second = ScriptedFetcher(UPDATED_XML)
        service = open_index(settings, fetcher=second, clock=clock)

        assert len(second.calls) == 1
        assert service.list_districts() == ["Barnim", "Prignitz"]
        assert settings.cache_path.read_bytes() == UPDATED_XML

    def test_outage_after_ttl_serves_stale_cache(self, settings, clock):
        open_index(settings, fetcher=ScriptedFetcher(SAMPLE_XML), clock=clock).close()

        clock.advance(days=2)
        service = open_index(settings, fetcher=ScriptedFetcher(offline()), clock=clock)

        assert service.lookup("Uckermark").level == 5
        assert settings.cache_path.read_bytes() == SAMPLE_XML

    def test_corrupt_cache_on_cold_start_is_fatal(self, settings, clock):
        settings.cache_path.parent.mkdir(parents=True)
        settings.cache_path.write_bytes(b"<wbs><tag>")
        with pytest.raises(IndexUnavailableError):
            open_index(
                settings,
                fetcher=ScriptedFetcher(offline()),
                clock=FakeClock(clock.now),
            )

    def test_long_lived_service(self, settings, clock):
        fetcher = ScriptedFetcher(SAMPLE_XML, offline(), UPDATED_XML)
        service = open_index(settings, fetcher=fetcher, clock=clock)

        clock.advance(hours=4)
        assert service.refresh().fetch_error is not None
        assert len(service.list_districts()) == 4

        clock.advance(minutes=10)
        report = service.refresh()
        assert report.fetched
        assert service.list_districts() == ["Barnim", "Prignitz"]
