from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..api.client import FetchError
from ..models.error_record import ErrorRecord

"""Fetch failure log.

One file per CLI run, ``<log_dir>/errors-YYYYMMDD-HHMMSS.log`` stamped (UTC)
when the run starts. Every failed report fetch of the run becomes one JSON
line. Nothing is created on disk for a run without failures.
"""

__all__ = [
    "ErrorRecord",
    "FetchFailureLog",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class FetchFailureLog:
    def __init__(self, log_dir: Path | None = None, started_at: datetime | None = None) -> None:
        stamp = (started_at or datetime.now(UTC)).strftime(TIMESTAMP_FMT)
        self.path = (log_dir or LOGS_DIR) / f"errors-{stamp}.log"
        self.failures: list[ErrorRecord] = []

    def record(self, source: str, error: FetchError) -> ErrorRecord:
        """Append ``error`` for ``source`` to the run's log file.

        Raises:
            OSError: log directory or file not writable (the record is still
                kept in ``failures``)
        """
        entry = ErrorRecord.create(
            source=source,
            error_kind=error.kind.value,
            status=error.status,
            message=str(error),
        )
        self.failures.append(entry)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(entry.to_json_line() + "\n")
        return entry
