from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import requests

"""Report endpoint client.

fetch_rows() performs the single bulk fetch of the board. It either returns
the complete row list or raises FetchError; there are no partial results and
no retries. The kind of a FetchError only selects the message shown to the
user.
"""

__all__ = [
    "DEFAULT_TIMEOUT",
    "FetchError",
    "FetchErrorKind",
    "extract_rows",
    "fetch_rows",
    "read_rows_file",
]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds


class FetchErrorKind(Enum):
    SERVER = "server"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    HTTP = "http"
    NETWORK = "network"
    DECODE = "decode"


_MESSAGES = {
    FetchErrorKind.SERVER: "The report server had a problem. Please try again later.",
    FetchErrorKind.NOT_FOUND: "The delivery report could not be found.",
    FetchErrorKind.UNAUTHORIZED: "Access to the delivery report was denied.",
    FetchErrorKind.HTTP: "The delivery report request failed.",
    FetchErrorKind.NETWORK: "Could not reach the report server. Check your connection.",
    FetchErrorKind.DECODE: "The report server returned data that could not be read.",
}


class FetchError(Exception):
    """Report could not be fetched (transport, non-2xx status or bad JSON)."""

    def __init__(self, kind: FetchErrorKind, detail: str, status: int | None = None) -> None:
        super().__init__(f"{kind.value}: {detail}")
        self.kind = kind
        self.detail = detail
        self.status = status

    @property
    def user_message(self) -> str:
        return _MESSAGES[self.kind]

    @classmethod
    def from_status(cls, status: int) -> FetchError:
        if status >= 500:
            kind = FetchErrorKind.SERVER
        elif status == 404:
            kind = FetchErrorKind.NOT_FOUND
        elif status in (401, 403):
            kind = FetchErrorKind.UNAUTHORIZED
        else:
            kind = FetchErrorKind.HTTP
        return cls(kind, f"Fetch failed: {status}", status=status)


def extract_rows(payload: Any) -> list[dict[str, Any]]:
    """Rows of a report payload: ``{"data": [...]}`` or a bare list, else []."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        rows = payload["data"]
    elif isinstance(payload, list):
        rows = payload
    else:
        return []
    return [r for r in rows if isinstance(r, dict)]


def fetch_rows(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> list[dict[str, Any]]:
    """Fetch all report rows from ``url``.

    Raises:
        FetchError: on transport failure, non-2xx status or invalid JSON
    """
    http = session or requests
    logger.info(f"Fetching report rows from: {url}")
    try:
        response = http.get(url, headers={"Accept": "application/json"}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise FetchError(FetchErrorKind.NETWORK, str(e)) from e

    if not response.ok:
        raise FetchError.from_status(response.status_code)

    try:
        payload = response.json()
    except ValueError as e:  # requests' JSONDecodeError subclasses ValueError
        raise FetchError(FetchErrorKind.DECODE, f"invalid json: {e}", status=response.status_code) from e

    rows = extract_rows(payload)
    logger.debug(f"fetched {len(rows)} rows")
    return rows


def read_rows_file(path: Path) -> list[dict[str, Any]]:
    """Read a saved report payload from disk (same shapes as the endpoint)."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FetchError(FetchErrorKind.NOT_FOUND, f"cannot read {path}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise FetchError(FetchErrorKind.DECODE, f"invalid json in {path}: {e}") from e
    return extract_rows(payload)
