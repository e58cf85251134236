# tests/unit/fetching/test_http_fetcher.py
"""Tests for fetching/http_fetcher.py (requests session patched, no network)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, MutableMapping, Optional

import pytest
import requests

from tests.support import SAMPLE_XML, SOURCE_URL
from waldbrandindex.config.settings import Settings
from waldbrandindex.fetching.http_fetcher import HttpFetcher
from waldbrandindex.fetching.models import FetchFailure

# ----- test doubles ----------------------------------------------------------


@dataclass
class _Call:
    url: str
    timeout: float | None


class _DummyResp:
    """Minimal Response-like object with the attributes we use."""

    def __init__(
        self,
        *,
        status: int = 200,
        content: bytes = SAMPLE_XML,
        reason: str = "OK",
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.url = SOURCE_URL
        self.status_code = status
        self.content = content
        self.reason = reason
        self.headers: MutableMapping[str, str] = dict(
            headers or {"Content-Type": "application/xml"}
        )
        self.elapsed = timedelta(milliseconds=42)


def _patch_get(fetcher: HttpFetcher, outcome: Any, calls: list[_Call]) -> None:
    """Replace Session.get on the fetcher's session."""

    def _fake_get(url: str, timeout: float | None = None, **_: Any) -> Any:
        calls.append(_Call(url=url, timeout=timeout))
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    fetcher._session.get = _fake_get  # type: ignore[method-assign]


# ----- tests ----------------------------------------------------------------


class TestFetchSuccess:
    def test_returns_body(self):
        fetcher = HttpFetcher(default_timeout=5)
        calls: list[_Call] = []
        _patch_get(fetcher, _DummyResp(), calls)

        assert fetcher.fetch(SOURCE_URL) == SAMPLE_XML
        assert calls == [_Call(url=SOURCE_URL, timeout=5.0)]

    def test_single_attempt_only(self):
        fetcher = HttpFetcher()
        calls: list[_Call] = []
        _patch_get(fetcher, _DummyResp(status=503, reason="Service Unavailable"), calls)
        fetcher.fetch(SOURCE_URL)
        assert len(calls) == 1


class TestFetchFailures:
    def test_http_error_status(self):
        fetcher = HttpFetcher()
        _patch_get(fetcher, _DummyResp(status=404, reason="Not Found", content=b""), [])
        outcome = fetcher.fetch(SOURCE_URL)
        assert isinstance(outcome, FetchFailure)
        assert outcome.status_code == 404
        assert "404" in str(outcome)

    def test_timeout(self):
        fetcher = HttpFetcher()
        _patch_get(fetcher, requests.Timeout("slow"), [])
        outcome = fetcher.fetch(SOURCE_URL)
        assert isinstance(outcome, FetchFailure)
        assert outcome.reason == "timeout"

    def test_connection_error(self):
        fetcher = HttpFetcher()
        _patch_get(fetcher, requests.ConnectionError("refused"), [])
        outcome = fetcher.fetch(SOURCE_URL)
        assert isinstance(outcome, FetchFailure)
        assert outcome.status_code is None
        assert "refused" in outcome.reason

    def test_empty_body(self):
        fetcher = HttpFetcher()
        _patch_get(fetcher, _DummyResp(content=b""), [])
        outcome = fetcher.fetch(SOURCE_URL)
        assert isinstance(outcome, FetchFailure)
        assert outcome.reason == "empty response"

    def test_missing_url_raises_value_error(self):
        fetcher = HttpFetcher()
        with pytest.raises(ValueError):
            fetcher.fetch("")


class TestConfiguration:
    def test_default_headers(self):
        fetcher = HttpFetcher(user_agent="ua-test/1.0", default_headers={"X-Test": "1"})
        assert fetcher._session.headers["User-Agent"] == "ua-test/1.0"
        assert fetcher._session.headers["X-Test"] == "1"
        assert "xml" in fetcher._session.headers["Accept"]

    def test_from_settings(self):
        s = Settings(_env_file=None, http_timeout=7.5, http_user_agent="wbi-test")
        fetcher = HttpFetcher.from_settings(s)
        assert fetcher.timeout == 7.5
        assert fetcher._session.headers["User-Agent"] == "wbi-test"

    def test_close(self):
        fetcher = HttpFetcher()

        closed = {"flag": False}

        def _fake_close() -> None:
            closed["flag"] = True

        fetcher._session.close = _fake_close  # type: ignore[method-assign]
        with fetcher:
            pass
        assert closed["flag"] is True
