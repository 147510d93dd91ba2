"""Core data models shared by the city resolution pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class CityRecord:
    """One gazetteer row: a city and its zone/district hierarchy."""

    name: str
    city_id: Optional[int] = None
    zone_id: Optional[int] = None
    zone_name: Optional[str] = None
    district_id: Optional[int] = None
    district_name: Optional[str] = None
    region: str = field(init=False, default="")

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("CityRecord.name must be a non-empty string.")
        object.__setattr__(self, "region", self.district_name or self.zone_name or "")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "city_id": self.city_id,
            "zone_id": self.zone_id,
            "zone_name": self.zone_name,
            "district_id": self.district_id,
            "district_name": self.district_name,
            "region": self.region,
        }


@dataclass(frozen=True, slots=True)
class GazetteerSnapshot:
    """Immutable view of the city dataset held by the cache."""

    records: Tuple[CityRecord, ...]
    fetched_at: float
    source: str = "sheet"


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    city: CityRecord
    score: int
