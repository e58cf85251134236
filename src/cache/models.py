# src/cache/models.py
"""Cache domain model: the last successfully fetched source document."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class CachedDocument(BaseModel):
    """Raw bytes of the cached document and the time this system fetched it."""

    model_config = ConfigDict(frozen=True)

    raw_bytes: bytes
    fetched_at: datetime

    @field_validator("raw_bytes")
    @classmethod
    def validate_raw_bytes(cls, v: bytes) -> bytes:
        if not v:
            raise ValueError("raw_bytes must not be empty")
        return v

    @field_validator("fetched_at")
    @classmethod
    def validate_fetched_at(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("fetched_at must be timezone-aware")
        return v

    @property
    def size_bytes(self) -> int:
        return len(self.raw_bytes)
