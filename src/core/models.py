# src/core/models.py
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# District name -> risk level, in document order.
DistrictRiskMap = dict[str, int]


class RiskDescriptor(BaseModel):
    """Display information derived from a risk level."""

    model_config = ConfigDict(frozen=True)

    level: int
    color: str
    description: str


class ParsedIndex(BaseModel):
    """Result of parsing one source document."""

    districts: DistrictRiskMap = Field(default_factory=dict)
    last_updated: str | None = None


class IndexSnapshot(BaseModel):
    """Immutable, fully-built view served to readers.

    The service replaces the whole snapshot on every successful parse, so the
    district map and the publication date always belong to the same document.
    """

    model_config = ConfigDict(frozen=True)

    index: ParsedIndex
    loaded_at: datetime
    source_fetched_at: datetime | None = None

    @property
    def districts(self) -> DistrictRiskMap:
        return self.index.districts

    @property
    def last_updated(self) -> str | None:
        return self.index.last_updated
