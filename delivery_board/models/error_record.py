from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for error logging.

Structured record of a report fetch failure, written as one JSON line by
FetchFailureLog. ``status`` is the HTTP status code, or -1 when the failure
happened before a response was received (transport / decode errors without
a status).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Report URL (or input file) being read
        error_kind: FetchError kind (server, not_found, unauthorized, http, network, decode)
        status: HTTP status code, -1 when unknown
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    source: str
    error_kind: str
    status: int
    message: str

    @staticmethod
    def create(source: str, error_kind: str, status: int | None, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            source=source,
            error_kind=error_kind,
            status=-1 if status is None else status,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
