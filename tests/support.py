# tests/support.py
"""Test doubles and sample documents shared by unit and integration tests.

Provides sample source documents, a scripted fetcher and a controllable
clock. No network access; all I/O goes to tmp_path.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from waldbrandindex.fetching.base_fetcher import BaseFetcher
from waldbrandindex.fetching.models import FetchFailure

SOURCE_URL = "https://example.test/wgs.xml"

BARNIM_XML = (
    b'<wbs><tag><datum>2025-03-11</datum>'
    b'<landkreis name="Barnim">3</landkreis></tag></wbs>'
)

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<wbs>
  <tag>
    <datum>2025-06-02</datum>
    <landkreis name="Barnim">2</landkreis>
    <landkreis name="Märkisch-Oderland">4</landkreis>
    <landkreis name="Oberhavel">1</landkreis>
    <landkreis name="Uckermark">5</landkreis>
  </tag>
</wbs>
""".encode("utf-8")

UPDATED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<wbs>
  <tag>
    <datum>2025-06-03</datum>
    <landkreis name="Barnim">3</landkreis>
    <landkreis name="Prignitz">2</landkreis>
  </tag>
</wbs>
""".encode("utf-8")


# === Test doubles ===


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 6, 2, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class ScriptedFetcher(BaseFetcher):
    """Returns queued outcomes in order; repeats the last one when exhausted."""

    def __init__(self, *outcomes: bytes | FetchFailure) -> None:
        self._outcomes = list(outcomes) or [FetchFailure(url=SOURCE_URL, reason="offline")]
        self.calls: list[str] = []
        self.closed = False

    def fetch(self, url: str) -> bytes | FetchFailure:
        self.calls.append(url)
        if len(self._outcomes) > 1:
            return self._outcomes.pop(0)
        return self._outcomes[0]

    def close(self) -> None:
        self.closed = True


def offline() -> FetchFailure:
    return FetchFailure(url=SOURCE_URL, reason="transport error: connection refused")


