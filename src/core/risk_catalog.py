# src/core/risk_catalog.py
"""Risk level -> color and description.

Pure lookup table, no I/O. Every integer maps to a descriptor: levels outside
1-5 (including the 0 produced for unreadable values) fall into the
catastrophic bucket.
"""

from __future__ import annotations

from waldbrandindex.core.models import RiskDescriptor

DEFAULT_COLOR = "#6c757d"
DEFAULT_DESCRIPTION = "Katastrophen Gefahr"

_LEVELS: dict[int, tuple[str, str]] = {
    1: ("#28a745", "Sehr geringe Gefahr"),  # green
    2: ("#9acd32", "Geringe Gefahr"),  # yellow-green
    3: ("#ffc107", "Mittlere Gefahr"),  # yellow
    4: ("#fd7e14", "Hohe Gefahr"),  # orange
    5: ("#dc3545", "Sehr hohe Gefahr"),  # red
}


def color_for_level(level: int) -> str:
    """Hex color code for a risk level."""
    entry = _LEVELS.get(level)
    return entry[0] if entry else DEFAULT_COLOR


def description_for_level(level: int) -> str:
    """German description for a risk level."""
    entry = _LEVELS.get(level)
    return entry[1] if entry else DEFAULT_DESCRIPTION


def describe_level(level: int) -> RiskDescriptor:
    """Build the full descriptor for a risk level."""
    return RiskDescriptor(
        level=level,
        color=color_for_level(level),
        description=description_for_level(level),
    )
