"""In-memory, time-bounded cache over the city reference dataset.

The cache never raises to its readers: missing configuration, HTTP failures and
empty sheets all degrade to the previous snapshot, or to the built-in city list
when nothing has been loaded yet. Readers always receive an immutable snapshot;
a refresh builds a new one and swaps the reference.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from typing import Callable, List, Optional, Sequence, Tuple

from city_resolver.core.config import ConfigError, Settings, require_sheet_config
from city_resolver.etl.transform import parse_city_rows
from city_resolver.models import CityRecord, GazetteerSnapshot
from city_resolver.vendors import google_sheets
from city_resolver.vendors.google_sheets import Credentials, SheetsError

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, str, Credentials], List[List[str]]]
Clock = Callable[[], float]
TokenProvider = Callable[[], Optional[str]]

DEFAULT_CITIES: Tuple[CityRecord, ...] = (
    CityRecord("Warapitiya", city_id=176, zone_id=3, zone_name="Outstation", district_id=1, district_name="Ampara"),
    CityRecord("Mawela", city_id=1464, zone_id=3, zone_name="Outstation", district_id=11, district_name="Kandy"),
    CityRecord("Kelanimulla", city_id=2830, zone_id=2, zone_name="Suburbs", district_id=5, district_name="Colombo"),
    CityRecord(
        "Uduthuththiripitiya", city_id=5373, zone_id=3, zone_name="Outstation", district_id=7, district_name="Gampaha"
    ),
    CityRecord(
        "Galagedarah Homagama", city_id=6300, zone_id=3, zone_name="Outstation", district_id=5, district_name="Colombo"
    ),
    CityRecord("Colombo", zone_id=2, zone_name="Suburbs", district_id=5, district_name="Colombo"),
    CityRecord("Kandy", zone_id=3, zone_name="Outstation", district_id=11, district_name="Kandy"),
    CityRecord("Gampaha", zone_id=3, zone_name="Outstation", district_id=7, district_name="Gampaha"),
    CityRecord("Negombo", zone_id=3, zone_name="Outstation", district_id=7, district_name="Gampaha"),
    CityRecord("Jaffna", zone_id=3, zone_name="Outstation", district_id=12, district_name="Jaffna"),
)


class EmptyDatasetError(SheetsError):
    """The sheet was reachable but produced no usable city rows."""


class GazetteerCache:
    """TTL cache of CityRecords backed by a tabular data source."""

    def __init__(
        self,
        settings: Settings,
        fetcher: Optional[Fetcher] = None,
        clock: Clock = time.monotonic,
        token_provider: Optional[TokenProvider] = None,
        default_records: Sequence[CityRecord] = DEFAULT_CITIES,
    ) -> None:
        self._settings = settings
        self._fetcher = fetcher or functools.partial(
            google_sheets.fetch_city_rows, timeout=settings.request_timeout
        )
        self._clock = clock
        self._token_provider = token_provider or (lambda: settings.google_access_token)
        self._default_records = tuple(default_records)
        self._snapshot: Optional[GazetteerSnapshot] = None
        self._refresh_lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._settings.cache_ttl_seconds

    @property
    def snapshot(self) -> Optional[GazetteerSnapshot]:
        return self._snapshot

    def get_records(self) -> Tuple[CityRecord, ...]:
        """Return the current city records, refreshing first if the snapshot is stale."""
        snapshot = self._snapshot
        if self._is_fresh(snapshot):
            logger.debug("Using cached cities: %d", len(snapshot.records))
            return snapshot.records
        return self.refresh(force=False).records

    def refresh(self, force: bool = False) -> GazetteerSnapshot:
        """Reload the dataset; without ``force`` a fresh snapshot is kept as is."""
        with self._refresh_lock:
            # Another caller may have refreshed while we waited for the lock.
            snapshot = self._snapshot
            if not force and self._is_fresh(snapshot):
                return snapshot
            self._snapshot = self._load(previous=snapshot)
            return self._snapshot

    def clear(self) -> None:
        self._snapshot = None
        logger.info("City cache cleared")

    def _is_fresh(self, snapshot: Optional[GazetteerSnapshot]) -> bool:
        if snapshot is None or not snapshot.records:
            return False
        return self._clock() - snapshot.fetched_at < self._settings.cache_ttl_seconds

    def _load(self, previous: Optional[GazetteerSnapshot]) -> GazetteerSnapshot:
        now = self._clock()
        try:
            require_sheet_config(self._settings)
        except ConfigError as exc:
            logger.warning("%s Using default cities.", exc)
            return GazetteerSnapshot(records=self._default_records, fetched_at=now, source="default")

        try:
            records = self._fetch_records()
        except Exception as exc:  # noqa: BLE001
            if previous is not None and previous.records:
                logger.warning("Failed to refresh cities (%s); keeping %d cached cities.", exc, len(previous.records))
                return GazetteerSnapshot(records=previous.records, fetched_at=now, source=previous.source)
            logger.warning("Failed to load cities (%s); using default cities.", exc)
            return GazetteerSnapshot(records=self._default_records, fetched_at=now, source="default")

        logger.info('Loaded %d cities from "%s" sheet', len(records), self._settings.city_sheet_name)
        return GazetteerSnapshot(records=records, fetched_at=now, source="sheet")

    def _fetch_records(self) -> Tuple[CityRecord, ...]:
        credentials = Credentials(
            api_key=self._settings.google_api_key,
            access_token=self._token_provider(),
        )
        rows = self._fetcher(self._settings.spreadsheet_id, self._settings.city_sheet_name, credentials)
        if not rows:
            raise EmptyDatasetError("Empty sheet")
        records = tuple(parse_city_rows(rows))
        if not records:
            raise EmptyDatasetError("Sheet contained no usable city rows")
        return records
