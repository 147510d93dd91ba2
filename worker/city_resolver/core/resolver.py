"""Address-to-city resolution and gazetteer lookups."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional

from city_resolver.core.config import get_settings
from city_resolver.core.decision import decide
from city_resolver.core.gazetteer import GazetteerCache
from city_resolver.core.lines import classify_lines
from city_resolver.core.scoring import score_candidates
from city_resolver.core.tokenizer import tokenize
from city_resolver.models import CityRecord

logger = logging.getLogger(__name__)

MIN_ADDRESS_LENGTH = 3
DEFAULT_LISTING_LIMIT = 20
SEARCH_LIMIT = 30


class ResolutionError(ValueError):
    """Raised for inputs that cannot be resolved at all."""


class InputTooShortError(ResolutionError):
    """Raised when the address has fewer than three meaningful characters."""


class CityResolver:
    """Resolves free-form shipping addresses to gazetteer cities."""

    def __init__(self, cache: GazetteerCache) -> None:
        self.cache = cache

    def resolve_city(self, address: str) -> Optional[CityRecord]:
        """Return the best matching city, or ``None`` when no match is confident enough."""
        if not isinstance(address, str) or len(address.strip()) < MIN_ADDRESS_LENGTH:
            raise InputTooShortError("Address too short")

        cities = self.cache.get_records()
        content_lines, reversed_lines = classify_lines(address)
        logger.debug("Lines after stripping contacts: %s", content_lines)
        words, postal_code = tokenize(address)

        candidates = score_candidates(
            cities,
            content_lines,
            reversed_lines,
            words,
            address.lower(),
            postal_code,
        )
        return decide(candidates)

    def refresh_gazetteer(self, force: bool = False) -> None:
        snapshot = self.cache.refresh(force=force)
        logger.info("Gazetteer holds %d cities (source=%s)", len(snapshot.records), snapshot.source)

    def search_cities(self, query: str) -> List[CityRecord]:
        """Autocomplete over city, district, zone and region names."""
        cities = self.cache.get_records()
        needle = (query or "").lower().strip()
        if not needle:
            return sorted(cities, key=lambda city: city.name)[:DEFAULT_LISTING_LIMIT]

        def matches(city: CityRecord) -> bool:
            fields = (city.name, city.district_name or "", city.zone_name or "", city.region)
            return any(needle in value.lower() for value in fields)

        def sort_key(city: CityRecord):
            name = city.name.lower()
            return (name != needle, not name.startswith(needle), city.name)

        return sorted(filter(matches, cities), key=sort_key)[:SEARCH_LIMIT]

    def get_city_by_name(self, name: str) -> Optional[CityRecord]:
        needle = (name or "").lower()
        return next((city for city in self.cache.get_records() if city.name.lower() == needle), None)

    def get_districts(self) -> List[str]:
        return _unique_sorted(city.district_name for city in self.cache.get_records())

    def get_zones(self) -> List[str]:
        return _unique_sorted(city.zone_name for city in self.cache.get_records())


def _unique_sorted(values) -> List[str]:
    return sorted({value for value in values if value and value.strip()})


@lru_cache(maxsize=1)
def get_resolver() -> CityResolver:
    """Process-wide resolver built from environment settings."""
    return CityResolver(GazetteerCache(get_settings()))
