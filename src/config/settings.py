# src/config/settings.py
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for the upstream URL, the cache artifact and logging.
Every field can be overridden by an environment variable of the same name
(case-insensitive), e.g. ``SOURCE_URL`` or ``CACHE_TTL_SECONDS``.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from waldbrandindex.core.errors import ConfigurationError

DEFAULT_SOURCE_URL = "https://mleuv.brandenburg.de/mleuv/de/wgs.xml"


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Upstream source ===
    source_url: str = DEFAULT_SOURCE_URL
    http_timeout: float = 30.0
    http_user_agent: str = "waldbrandindex/0.1 (+https://github.com/ztatement/Waldbrandgefahrenindex)"

    # === Cache ===
    cache_backend: Literal["file", "memory"] = "file"
    cache_path: Path = Path("./.cache/wgs_cache.xml")
    cache_ttl_seconds: int = 10800  # 3 hours

    # === Presentation defaults ===
    default_district: str = "Märkisch-Oderland"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("source_url")
    @classmethod
    def validate_source_url(cls, v: str) -> str:
        """SOURCE_URL must be an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("source_url must start with http:// or https://")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be > 0")
        return v

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "file" and self.cache_path.expanduser().is_dir():
            errors.append(
                f"CACHE_PATH must point to a file, got directory {self.cache_path}"
            )

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if not self.default_district.strip():
            errors.append("DEFAULT_DISTRICT must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def cache_ttl(self) -> timedelta:
        """Cache lifetime as a timedelta."""
        return timedelta(seconds=self.cache_ttl_seconds)


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding hosts).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
