"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    spreadsheet_id: str
    city_sheet_name: str = "Cities"
    google_access_token: Optional[str] = None
    cache_ttl_seconds: float = 300.0
    request_timeout: float = 10.0
    resolver_port: int = 9000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_API_KEY", "").strip()
    spreadsheet_id = os.getenv("GOOGLE_SHEET_ID", "").strip()
    city_sheet_name = os.getenv("CITY_SHEET_NAME", "").strip() or "Cities"
    google_access_token = os.getenv("GOOGLE_ACCESS_TOKEN") or None
    cache_ttl_seconds = float(os.getenv("CITY_CACHE_TTL_SECONDS", "300"))
    request_timeout = float(os.getenv("SHEETS_TIMEOUT_SECONDS", "10"))
    resolver_port = int(os.getenv("RESOLVER_PORT", "9000"))

    if not google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; the built-in city list will be used.")
    if not spreadsheet_id:
        logger.warning("GOOGLE_SHEET_ID is not configured; the built-in city list will be used.")

    return Settings(
        google_api_key=google_api_key,
        spreadsheet_id=spreadsheet_id,
        city_sheet_name=city_sheet_name,
        google_access_token=google_access_token,
        cache_ttl_seconds=cache_ttl_seconds,
        request_timeout=request_timeout,
        resolver_port=resolver_port,
    )


def require_sheet_config(settings: Settings) -> None:
    if not settings.google_api_key:
        raise ConfigError("GOOGLE_API_KEY must be set to load cities from Google Sheets.")
    if not settings.spreadsheet_id:
        raise ConfigError("GOOGLE_SHEET_ID must be set to load cities from Google Sheets.")
