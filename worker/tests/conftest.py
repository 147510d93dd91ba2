import sys
from pathlib import Path

import pytest

# Ensure `city_resolver` package is importable when running pytest from the worker directory.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from city_resolver.core.config import Settings  # noqa: E402


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sheet_settings():
    return Settings(google_api_key="key", spreadsheet_id="sheet-id", cache_ttl_seconds=300)
