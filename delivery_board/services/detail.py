from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..models.canonical_record import CanonicalRecord
from ..models.line_item import LineItem
from ..models.status_summary import StatusSummary
from .normalizer import format_date
from .status import summarize_status

"""Task detail view model and display ordering.

The detail panel shows one release: its dates in display form, the status
badge, the tracking link and the shipped items. Opening it from a
``#task=<id>`` link goes through find_task().
"""

__all__ = [
    "TaskDetail",
    "build_task_detail",
    "find_task",
    "sort_for_display",
]

TITLE_FIELD = "Name"
TRACKING_FIELD = "ReleasesBOLTrackingNumber"
SHIP_TO_FIELD = "QuoteShipToLocation"


@dataclass(frozen=True)
class TaskDetail:
    task_id: str
    title: str
    customer: str
    milestone: str
    status: StatusSummary
    due_date: str
    completion_date: str
    contract_date: str
    tracking: str
    ship_to: str
    items: tuple[LineItem, ...]

    @property
    def tracking_is_link(self) -> bool:
        return self.tracking.startswith(("http://", "https://"))

    def to_dict(self) -> dict[str, object]:
        return {
            "task_id": self.task_id,
            "title": self.title,
            "customer": self.customer,
            "milestone": self.milestone,
            "status": self.status.to_dict(),
            "due_date": self.due_date,
            "completion_date": self.completion_date,
            "contract_date": self.contract_date,
            "tracking": self.tracking,
            "ship_to": self.ship_to,
            "items": [{"name": i.name, "qty": i.display_qty} for i in self.items],
        }


def find_task(records: Iterable[CanonicalRecord], task_id: str | None) -> CanonicalRecord | None:
    """First record whose Number equals ``task_id`` (None when absent)."""
    wanted = (task_id or "").strip()
    if not wanted:
        return None
    for record in records:
        if record.task_id == wanted:
            return record
    return None


def _detail_date(record: CanonicalRecord, name: str) -> str:
    # the detail dates are shown even when left out of config date_fields
    if name in record.dates:
        return record.dates[name]
    return format_date(record.get(name))


def build_task_detail(record: CanonicalRecord) -> TaskDetail:
    return TaskDetail(
        task_id=record.task_id,
        title=record.text(TITLE_FIELD),
        customer=record.customer_name,
        milestone=record.milestone_name,
        status=summarize_status([record]),
        due_date=_detail_date(record, "DueDate"),
        completion_date=_detail_date(record, "CompletionDate"),
        contract_date=_detail_date(record, "ReleasesContractDate"),
        tracking=record.text(TRACKING_FIELD),
        ship_to=record.text(SHIP_TO_FIELD),
        items=record.items,
    )


def sort_for_display(records: Sequence[CanonicalRecord], field: str = "DueDate") -> list[CanonicalRecord]:
    """Order records by a formatted date ascending; blanks last, ties stable."""
    def key(record: CanonicalRecord) -> tuple[int, str]:
        value = record.formatted_date(field)
        return (0, value) if value else (1, "")
    return sorted(records, key=key)
