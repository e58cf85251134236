# src/fetching/http_fetcher.py
"""HTTP fetcher (requests-based).

Issues a single GET with default headers and timeout injected at
construction. Retries, backoff and caching are the caller's business.

Thread-safety
-------------
Not thread-safe; use one instance per worker if you share it.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Mapping, Optional

import requests
from requests import RequestException, Response, Session

from waldbrandindex.fetching.base_fetcher import BaseFetcher
from waldbrandindex.fetching.models import FetchFailure

if TYPE_CHECKING:
    from waldbrandindex.config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "waldbrandindex/0.1"


def _elapsed_ms(resp: Response) -> Optional[int]:
    """Return the elapsed time in milliseconds for a ``requests.Response``."""
    elapsed: Optional[timedelta] = getattr(resp, "elapsed", None)
    if elapsed is None:
        return None
    return int(round(elapsed.total_seconds() * 1000.0))


class HttpFetcher(BaseFetcher):
    """Fetch a document over HTTP(S) with ``requests``.

    Parameters
    ----------
    user_agent:
        Value for the ``User-Agent`` header.
    default_timeout:
        Timeout in seconds for each request.
    default_headers:
        Extra headers applied to all requests.
    """

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        default_timeout: float = 30.0,
        default_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._session: Session = requests.Session()

        base: dict[str, str] = {
            "User-Agent": user_agent,
            "Accept": "application/xml, text/xml;q=0.9, */*;q=0.5",
        }
        if default_headers:
            base.update(default_headers)
        self._session.headers.update(base)

        self._default_timeout = float(default_timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpFetcher:
        """Build a fetcher from the upstream section of Settings."""
        return cls(
            user_agent=settings.http_user_agent,
            default_timeout=settings.http_timeout,
        )

    @property
    def timeout(self) -> float:
        return self._default_timeout

    def fetch(self, url: str) -> bytes | FetchFailure:
        """GET ``url`` and return the body bytes.

        Returns
        -------
        bytes | FetchFailure
            The non-empty body on success; a FetchFailure for transport
            errors, timeouts, HTTP error statuses and empty bodies.

        Raises
        ------
        ValueError
            If ``url`` is missing or empty.
        """
        if not isinstance(url, str) or not url.strip():
            raise ValueError("HttpFetcher.fetch: url must be a non-empty string.")

        try:
            resp: Response = self._session.get(url, timeout=self._default_timeout)
        except requests.Timeout:
            logger.warning("Timeout after %.1fs fetching %s", self._default_timeout, url)
            return FetchFailure(url=url, reason="timeout")
        except RequestException as e:
            logger.warning("Transport error fetching %s: %s", url, e)
            return FetchFailure(url=url, reason=f"transport error: {e}")

        if resp.status_code >= 400:
            logger.warning("HTTP %d fetching %s", resp.status_code, url)
            return FetchFailure(
                url=url,
                reason=resp.reason or "HTTP error",
                status_code=resp.status_code,
            )

        body = resp.content
        if not body:
            logger.warning("Empty response body from %s", url)
            return FetchFailure(url=url, reason="empty response", status_code=resp.status_code)

        logger.debug(
            "Fetched %s: %d bytes in %s ms", resp.url, len(body), _elapsed_ms(resp)
        )
        return body

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
