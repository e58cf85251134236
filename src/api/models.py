# src/api/models.py
"""API-level models: RefreshReport, IndexState."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class IndexState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


class RefreshReport(BaseModel):
    """Outcome of IndexService.initialize(), refresh() or force_refresh()."""

    trigger: Literal["initialize", "refresh", "force_refresh"]
    fetch_attempted: bool = False
    fetched: bool = False
    fetch_error: str | None = None
    parsed: bool = False
    parse_error: str | None = None
    district_count: int = 0
    served_from: Literal["network", "cache"] = "cache"

    @property
    def degraded(self) -> bool:
        """True when the index was kept on older data because something failed."""
        return self.fetch_error is not None or self.parse_error is not None
