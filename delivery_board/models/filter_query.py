from __future__ import annotations

from dataclasses import dataclass

from .canonical_record import CanonicalRecord
from .status_summary import StatusSummary

__all__ = [
    "FilterQuery",
    "VisibleGroup",
]


@dataclass(frozen=True)
class FilterQuery:
    """Free-text filter values (customer / milestone substring)."""
    customer: str = ""
    milestone: str = ""


@dataclass(frozen=True)
class VisibleGroup:
    """One customer/milestone card handed to the renderer."""
    customer: str
    milestone: str
    address: str
    records: list[CanonicalRecord]
    status: StatusSummary

    def to_dict(self) -> dict[str, object]:
        return {
            "customer": self.customer,
            "milestone": self.milestone,
            "address": self.address,
            "status": self.status.to_dict(),
            "records": [r.to_dict() for r in self.records],
        }
