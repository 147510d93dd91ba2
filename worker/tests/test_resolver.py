import pytest

from city_resolver.core import gazetteer
from city_resolver.core.resolver import CityResolver, InputTooShortError, ResolutionError
from city_resolver.models import CityRecord

SAMPLE = "John Doe\n123 Main Street\nColombo 01\n0771234567"


def _resolver(sheet_settings, clock, records=None, error=None):
    def fetcher(spreadsheet_id, sheet_name, credentials):
        if error:
            raise error
        return [["city_name", "district_name", "zone_name"]] + [
            [record.name, record.district_name or "", record.zone_name or ""] for record in records
        ]

    return CityResolver(gazetteer.GazetteerCache(sheet_settings, fetcher=fetcher, clock=clock))


@pytest.fixture
def resolver(sheet_settings, clock):
    records = [
        CityRecord("Colombo", district_name="Colombo"),
        CityRecord("Kandy", district_name="Kandy"),
    ]
    return _resolver(sheet_settings, clock, records=records)


@pytest.mark.parametrize("address", ["", "  ", "ab", " a\n ", None])
def test_short_input_is_rejected(resolver, address):
    with pytest.raises(InputTooShortError):
        resolver.resolve_city(address)
    assert issubclass(InputTooShortError, ResolutionError)


def test_resolves_sample_address(resolver):
    city = resolver.resolve_city(SAMPLE)
    assert city.name == "Colombo"
    assert city.region == "Colombo"


def test_resolution_is_deterministic(resolver):
    assert resolver.resolve_city(SAMPLE) == resolver.resolve_city(SAMPLE)


def test_unknown_address_returns_none(resolver):
    assert resolver.resolve_city("Jane\n9 Harbour Rd\nTrincomalee\n0771234567") is None


def test_ambiguous_address_returns_none(sheet_settings, clock):
    records = [
        CityRecord("Minuwangoda", district_name="Gampaha"),
        CityRecord("Veyangoda", district_name="Gampaha"),
    ]
    resolver = _resolver(sheet_settings, clock, records=records)
    # Only the shared district matches, so both score 45.
    assert resolver.resolve_city("No 5\nGampaha Rd\nXyz") is None


def test_duplicate_names_are_scored_independently(sheet_settings, clock):
    records = [CityRecord("Ratnapura"), CityRecord("Ratnapura", district_name="Ratnapura")]
    resolver = _resolver(sheet_settings, clock, records=records)
    assert resolver.resolve_city("Ratnapura").district_name == "Ratnapura"

    twins = _resolver(sheet_settings, clock, records=[CityRecord("Ella"), CityRecord("Ella", zone_name="Hill")])
    # Equal high scores still resolve through the high-confidence rule.
    assert twins.resolve_city("Road\nElla").zone_name is None


def test_fetch_failure_uses_default_dataset(sheet_settings, clock):
    resolver = _resolver(sheet_settings, clock, error=RuntimeError("sheet unreachable"))
    city = resolver.resolve_city(SAMPLE)
    assert city is not None
    assert city.name == "Colombo"
    assert resolver.cache.snapshot.source == "default"


def test_refresh_gazetteer(resolver):
    resolver.refresh_gazetteer(force=True)
    assert [city.name for city in resolver.cache.snapshot.records] == ["Colombo", "Kandy"]


def test_lookups_over_default_dataset(sheet_settings, clock):
    resolver = _resolver(sheet_settings, clock, error=RuntimeError("offline"))

    assert resolver.get_districts() == ["Ampara", "Colombo", "Gampaha", "Jaffna", "Kandy"]
    assert resolver.get_zones() == ["Outstation", "Suburbs"]
    assert resolver.get_city_by_name("negombo").name == "Negombo"
    assert resolver.get_city_by_name("Atlantis") is None


def test_search_cities_orders_exact_then_prefix(sheet_settings, clock):
    resolver = _resolver(sheet_settings, clock, error=RuntimeError("offline"))

    names = [city.name for city in resolver.search_cities("kandy")]
    assert names == ["Kandy", "Mawela"]

    names = [city.name for city in resolver.search_cities("ga")]
    assert names[:2] == ["Galagedarah Homagama", "Gampaha"]
    assert "Negombo" in names


def test_search_cities_without_query_lists_alphabetically(sheet_settings, clock):
    resolver = _resolver(sheet_settings, clock, error=RuntimeError("offline"))
    names = [city.name for city in resolver.search_cities("  ")]
    assert names == sorted(city.name for city in gazetteer.DEFAULT_CITIES)
