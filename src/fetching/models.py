# src/fetching/models.py
"""Fetch outcome values."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FetchFailure(BaseModel):
    """A failed retrieval; returned instead of raised so callers can keep stale data."""

    model_config = ConfigDict(frozen=True)

    url: str
    reason: str
    status_code: int | None = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.url}: HTTP {self.status_code} ({self.reason})"
        return f"{self.url}: {self.reason}"
