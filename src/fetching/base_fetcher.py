# src/fetching/base_fetcher.py
"""Abstract fetcher interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from waldbrandindex.fetching.models import FetchFailure


class BaseFetcher(ABC):
    """Retrieves the raw source document.

    Implementations perform exactly one attempt per call; retry policy
    belongs to the caller. Network and HTTP problems come back as a
    ``FetchFailure`` value.
    """

    @abstractmethod
    def fetch(self, url: str) -> bytes | FetchFailure:
        """Return the response body, or a FetchFailure."""

    def close(self) -> None:
        """Release transport resources (no-op by default)."""

    def __enter__(self) -> BaseFetcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
