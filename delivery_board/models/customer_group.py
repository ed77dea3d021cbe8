from __future__ import annotations

from dataclasses import dataclass, field

from .canonical_record import CanonicalRecord

__all__ = [
    "CustomerGroup",
]


@dataclass
class CustomerGroup:
    """Records of one customer bucketed by milestone.

    ``address`` is fixed when the group is created (first record seen for the
    customer). ``milestones`` keeps first-occurrence order.
    """
    address: str
    milestones: dict[str, list[CanonicalRecord]] = field(default_factory=dict)

    def add(self, milestone: str, record: CanonicalRecord) -> None:
        self.milestones.setdefault(milestone, []).append(record)

    @property
    def record_count(self) -> int:
        return sum(len(records) for records in self.milestones.values())
