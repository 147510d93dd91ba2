"""Utilities for transforming raw sheet rows into gazetteer records."""

import logging
import re
from typing import Callable, Dict, List, Optional, Sequence

from city_resolver.models import CityRecord

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")

HeaderPredicate = Callable[[str], bool]

# Order matters: the first header accepted by a predicate wins, and exact
# names are tested before substrings within each predicate.
_COLUMN_MATCHERS: Dict[str, HeaderPredicate] = {
    "city_id": lambda h: h == "city_id" or "city_id" in h or "city id" in h,
    "city_name": lambda h: h in ("city_name", "city name", "city") or "city_name" in h,
    "zone_id": lambda h: h == "zone_id" or "zone_id" in h or "zone id" in h,
    "zone_name": lambda h: h in ("zone name", "zone_name", "zone") or "zone name" in h,
    "district_id": lambda h: h == "district_id" or "district_id" in h or "district id" in h,
    "district_name": lambda h: h in ("district name", "district_name", "district") or "district name" in h,
}


def map_columns(header_row: Sequence[object]) -> Dict[str, int]:
    """Resolve each known column to its index in ``header_row`` (-1 when missing)."""
    headers = [str(header or "").lower().strip() for header in header_row]
    indices: Dict[str, int] = {}
    for column, matches in _COLUMN_MATCHERS.items():
        indices[column] = next((i for i, header in enumerate(headers) if matches(header)), -1)
    return indices


def parse_int(value: object) -> Optional[int]:
    digits = _NON_DIGITS.sub("", str(value))
    if not digits:
        return None
    return int(digits)


def _cell(row: Sequence[object], index: int) -> str:
    if index < 0 or index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    return str(value)


def to_city_record(row: Sequence[object], columns: Dict[str, int]) -> Optional[CityRecord]:
    name_index = columns["city_name"]
    name = _cell(row, name_index if name_index >= 0 else 0).strip()
    if not name:
        return None

    city_id = zone_id = district_id = None
    if _cell(row, columns["city_id"]):
        city_id = parse_int(_cell(row, columns["city_id"]))
    if _cell(row, columns["zone_id"]):
        zone_id = parse_int(_cell(row, columns["zone_id"]))
    if _cell(row, columns["district_id"]):
        district_id = parse_int(_cell(row, columns["district_id"]))

    return CityRecord(
        name=name,
        city_id=city_id,
        zone_id=zone_id,
        zone_name=_cell(row, columns["zone_name"]).strip() or None,
        district_id=district_id,
        district_name=_cell(row, columns["district_name"]).strip() or None,
    )


def parse_city_rows(rows: Sequence[Sequence[object]]) -> List[CityRecord]:
    """Parse sheet rows (header first) into CityRecords, dropping nameless rows."""
    if not rows:
        return []

    columns = map_columns(rows[0])
    logger.debug("Column mapping: %s", columns)

    cities: List[CityRecord] = []
    for row in rows[1:]:
        if not row:
            continue
        record = to_city_record(row, columns)
        if record is None:
            logger.debug("Skipping row without a city name: %s", row)
            continue
        cities.append(record)

    logger.info("Parsed %d cities from %d data rows", len(cities), len(rows) - 1)
    return cities
