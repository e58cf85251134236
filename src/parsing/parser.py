# src/parsing/parser.py
"""XML parser for the forest-fire danger document.

Expected shape::

    <wbs>
      <tag>
        <datum>2025-03-11</datum>
        <landkreis name="Barnim">3</landkreis>
        ...
      </tag>
    </wbs>

Only the first ``tag`` container is read. Structural problems (not XML, no
``tag``, no ``landkreis`` entries) raise ParseError; a single unreadable
entry does not.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

from waldbrandindex.core.errors import ParseError
from waldbrandindex.core.models import DistrictRiskMap, ParsedIndex

logger = logging.getLogger(__name__)

CONTAINER_TAG = "tag"
DATE_TAG = "datum"
DISTRICT_TAG = "landkreis"
NAME_ATTR = "name"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_level(text: str | None) -> int:
    """Integer-cast risk text: leading digits count, anything else is 0.

    ``" 4 "`` -> 4, ``"3a"`` -> 3, ``"hoch"`` -> 0, ``None`` -> 0.
    """
    level, _ = _read_level(text)
    return level


def _read_level(text: str | None) -> tuple[int, bool]:
    """Level and whether the text carried a leading integer at all."""
    match = _LEADING_INT.match(text or "")
    if match is None:
        return 0, False
    return int(match.group(1)), True


def parse_document(raw: bytes) -> ParsedIndex:
    """Parse raw document bytes into a ParsedIndex.

    Args:
        raw: Document bytes as fetched (encoding is taken from the XML prolog).

    Returns:
        ParsedIndex with districts in document order and the publication date.

    Raises:
        ParseError: If the document is not well-formed or the expected
            container or district entries are absent.
    """
    if not raw or not raw.strip():
        raise ParseError("Empty document")

    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        raise ParseError(f"Document is not well-formed XML: {e}") from e

    container = root.find(CONTAINER_TAG)
    if container is None:
        raise ParseError(f"Missing <{CONTAINER_TAG}> container under <{root.tag}>")

    entries = container.findall(DISTRICT_TAG)
    if not entries:
        raise ParseError(f"No <{DISTRICT_TAG}> entries in <{CONTAINER_TAG}>")

    districts = _parse_districts(entries)
    if not districts:
        raise ParseError(f"No named <{DISTRICT_TAG}> entries in <{CONTAINER_TAG}>")

    return ParsedIndex(
        districts=districts,
        last_updated=_parse_date(container),
    )


def _parse_districts(entries: list[ET.Element]) -> DistrictRiskMap:
    districts: DistrictRiskMap = {}
    for entry in entries:
        name = (entry.get(NAME_ATTR) or "").strip()
        if not name:
            logger.warning("Skipping <%s> entry without a name", DISTRICT_TAG)
            continue

        text = entry.text
        level, numeric = _read_level(text)
        if not numeric:
            # Upstream data-quality gap: unreadable value lands in the catastrophic bucket.
            logger.warning(
                "Non-numeric risk value %r for district %s, using level 0",
                text,
                name,
            )
        if name in districts:
            logger.debug("Duplicate district %s, later value wins", name)
        districts[name] = level
    return districts


def _parse_date(container: ET.Element) -> str | None:
    node = container.find(DATE_TAG)
    if node is None or node.text is None:
        return None
    return node.text.strip() or None
