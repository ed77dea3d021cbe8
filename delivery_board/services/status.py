from __future__ import annotations

from collections.abc import Iterable

from ..models.canonical_record import CanonicalRecord
from ..models.status_summary import StatusSummary, StyleClass

__all__ = [
    "EMPTY_LABEL",
    "MIXED_LABEL",
    "SHIPPED_LABEL",
    "summarize_status",
]

EMPTY_LABEL = "—"
MIXED_LABEL = "Mixed"
SHIPPED_LABEL = "Shipped"
DONE_STATUS = "done"


def summarize_status(records: Iterable[CanonicalRecord]) -> StatusSummary:
    """Reduce the statuses of a group into one display status.

    Comparison is case-insensitive; blank statuses are ignored. The display
    form of a single status is its first-seen spelling.
    """
    seen: dict[str, str] = {}
    for record in records:
        status = record.status
        if status:
            seen.setdefault(status.lower(), status)

    if not seen:
        return StatusSummary(EMPTY_LABEL, StyleClass.PLAIN)
    if len(seen) > 1:
        return StatusSummary(MIXED_LABEL, StyleClass.MIXED)

    key, label = next(iter(seen.items()))
    if key == DONE_STATUS:
        return StatusSummary(SHIPPED_LABEL, StyleClass.NORMAL)
    return StatusSummary(label, StyleClass.PLAIN)
