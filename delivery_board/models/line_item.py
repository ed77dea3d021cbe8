from __future__ import annotations

from dataclasses import dataclass

"""LineItem model for the delivery board.

A LineItem is one name/quantity pair pulled out of the numbered
``ReleasesItem*`` fields of a report row.
"""

__all__ = [
    "LineItem",
    "NO_QUANTITY",
]

# qty sentinel for "no quantity" (the renderer shows a dash for it)
NO_QUANTITY = ""


@dataclass(frozen=True)
class LineItem:
    """Single shipped item of a release.

    ``qty`` keeps a dual representation: a number when the source value
    parses cleanly, otherwise the trimmed source string verbatim, and
    ``NO_QUANTITY`` when the source was empty.
    """
    name: str  # non-empty, trimmed
    qty: int | float | str = NO_QUANTITY

    @property
    def has_quantity(self) -> bool:
        return self.qty != NO_QUANTITY

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.qty, (int, float)) and not isinstance(self.qty, bool)

    @property
    def display_qty(self) -> str:
        if not self.has_quantity:
            return "—"
        return str(self.qty)

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "qty": self.qty}
