"""Client utilities for the Google Sheets values API."""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)
_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
DEFAULT_TIMEOUT = 10


def _build_session() -> requests.Session:
    session = requests.Session()
    retries = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET",),
    )
    session.mount("https://", HTTPAdapter(max_retries=retries))
    return session


_SESSION = _build_session()


class SheetsError(RuntimeError):
    """Raised when the Sheets API cannot return the requested values."""


class SheetNotFoundError(SheetsError):
    """The spreadsheet or sheet tab does not exist (HTTP 404)."""


class SheetForbiddenError(SheetsError):
    """The sheet is not shared publicly and no valid token was given (HTTP 403)."""


class SheetBadRequestError(SheetsError):
    """Usually a malformed API key or spreadsheet id (HTTP 400)."""


@dataclass(frozen=True)
class Credentials:
    """Either an OAuth access token or a plain API key; the token wins."""

    api_key: str = ""
    access_token: Optional[str] = None

    @property
    def uses_token(self) -> bool:
        return bool(self.access_token)


def fetch_city_rows(
    spreadsheet_id: str,
    sheet_name: str,
    credentials: Credentials,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[List[str]]:
    """Return the raw rows of ``sheet_name``, header row first."""
    url = f"{_BASE_URL}/{spreadsheet_id}/values/{quote(sheet_name, safe='')}"
    headers = {}
    params = {}
    if credentials.uses_token:
        headers["Authorization"] = f"Bearer {credentials.access_token}"
        logger.info("Fetching sheet %r using OAuth token", sheet_name)
    else:
        params = {"key": credentials.api_key, "majorDimension": "ROWS"}
        logger.info("Fetching sheet %r using API key", sheet_name)

    try:
        response = _SESSION.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise SheetsError(f"Request to Sheets API failed: {exc}") from exc

    logger.info("Sheets API response status=%s", response.status_code)
    if response.status_code >= 400:
        _raise_for_status(response, sheet_name)

    payload = response.json()
    rows = payload.get("values") or []
    logger.info("Retrieved %d rows from sheet %r", len(rows), sheet_name)
    return [[_cell(value) for value in row] for row in rows]


def _raise_for_status(response: Any, sheet_name: str) -> None:
    status = response.status_code
    detail = _error_detail(response)
    logger.error("Sheets API error status=%s detail=%s", status, detail)
    if status == 404:
        raise SheetNotFoundError(f'Sheet "{sheet_name}" not found. Please check the sheet name.')
    if status == 403:
        raise SheetForbiddenError(
            "Access forbidden. Make sure the sheet is publicly accessible or the token is valid."
        )
    if status == 400:
        raise SheetBadRequestError("Bad request. Please check the API key and sheet id.")
    raise SheetsError(f"HTTP error! status: {status}")


def _error_detail(response: Any) -> str:
    try:
        payload = response.json()
    except ValueError:
        return getattr(response, "reason", "") or ""
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(payload)[:200]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
