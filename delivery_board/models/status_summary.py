from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "StyleClass",
    "StatusSummary",
]


class StyleClass(Enum):
    """Display style of a status badge.

    - PLAIN: no status, or a single status other than done
    - NORMAL: every record is done (shown as "Shipped")
    - MIXED: more than one distinct status
    """
    PLAIN = "plain"
    NORMAL = "normal"
    MIXED = "mixed"


@dataclass(frozen=True)
class StatusSummary:
    label: str
    style_class: StyleClass = StyleClass.PLAIN

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "style_class": self.style_class.value}
