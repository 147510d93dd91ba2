import argparse
import io

import pytest

from city_resolver.core import gazetteer
from city_resolver.core.config import Settings
from city_resolver.core.resolver import CityResolver
from city_resolver.jobs import resolve_address


@pytest.fixture(autouse=True)
def resolver(monkeypatch):
    cache = gazetteer.GazetteerCache(Settings(google_api_key="", spreadsheet_id=""), clock=lambda: 0.0)
    instance = CityResolver(cache)
    monkeypatch.setattr(resolve_address, "get_resolver", lambda: instance)
    return instance


def test_build_parser_defaults():
    parser = resolve_address.build_parser()
    args = parser.parse_args([])
    assert isinstance(parser, argparse.ArgumentParser)
    assert args.address is None
    assert args.force_refresh is False
    assert args.check is False


def test_main_resolves_address_argument(capsys):
    code = resolve_address.main(["--address", "Jane\n45 Temple Rd\nKandy\n0771234567"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "Kandy\tKandy"


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("Beach Road\nNegombo\n"))
    assert resolve_address.main(["--force-refresh"]) == 0
    assert capsys.readouterr().out.startswith("Negombo")


def test_main_reports_unknown_city(capsys):
    assert resolve_address.main(["--address", "Nowhere Lane\nAtlantis"]) == 1
    assert capsys.readouterr().out.strip() == "-"


def test_main_rejects_short_address():
    assert resolve_address.main(["--address", "x"]) == 2


def test_check_resolves_sample(capsys):
    assert resolve_address.main(["--check"]) == 0
    assert capsys.readouterr().out.strip() == "Colombo"
