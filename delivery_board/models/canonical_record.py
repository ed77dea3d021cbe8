from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .line_item import LineItem

"""CanonicalRecord model for the delivery board.

A CanonicalRecord is a report row after normalization. All original fields
are kept unmodified in ``fields``; the normalizer only adds derived values
(``items`` and the formatted ``dates``).
"""

__all__ = [
    "CanonicalRecord",
    "CUSTOMER_NAME_FIELD",
    "CUSTOMER_NUMBER_FIELD",
    "MILESTONE_FIELD",
    "STATUS_FIELD",
    "ADDRESS_FIELD",
    "TASK_ID_FIELD",
]

CUSTOMER_NAME_FIELD = "CustomerName"
CUSTOMER_NUMBER_FIELD = "CustomerNumber"
MILESTONE_FIELD = "MilestoneName"
STATUS_FIELD = "Status"
ADDRESS_FIELD = "CustomerAddressFullAddress"
TASK_ID_FIELD = "Number"


def _text(value: Any) -> str:
    # None / NaN (float != itself) -> ""
    if value is None or (isinstance(value, float) and value != value):
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class CanonicalRecord:
    """Normalized report row (strongly typed view over the raw mapping)."""
    fields: dict[str, Any]  # original row fields, unmodified
    items: tuple[LineItem, ...] = ()
    dates: dict[str, str] = field(default_factory=dict)  # field -> YYYY-MM-DD (or raw text)

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def text(self, name: str) -> str:
        """Trimmed string form of a field ('' when missing/null)."""
        return _text(self.fields.get(name))

    @property
    def customer_name(self) -> str:
        return self.text(CUSTOMER_NAME_FIELD)

    @property
    def customer_number(self) -> str:
        return self.text(CUSTOMER_NUMBER_FIELD)

    @property
    def milestone_name(self) -> str:
        return self.text(MILESTONE_FIELD)

    @property
    def status(self) -> str:
        return self.text(STATUS_FIELD)

    @property
    def address(self) -> str:
        value = self.fields.get(ADDRESS_FIELD)
        return "" if value is None else str(value)

    @property
    def task_id(self) -> str:
        return self.text(TASK_ID_FIELD)

    def formatted_date(self, name: str) -> str:
        return self.dates.get(name, "")

    def to_dict(self) -> dict[str, Any]:
        """Original fields plus the derived ``items`` list (JSON friendly)."""
        out = dict(self.fields)
        out["items"] = [item.to_dict() for item in self.items]
        return out
