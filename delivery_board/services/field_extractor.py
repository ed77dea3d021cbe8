from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import pandas as pd

from ..models.line_item import NO_QUANTITY, LineItem

"""Line item extraction from numbered report fields.

Report rows carry up to ``MAX_ITEM_SLOTS`` items in numbered fields whose
names are not consistent across report versions. The accessor rules below
list, per logical field, the candidate field names in priority order:

    name: ReleasesItemNo{i}   -> ReleasesItem{i}Name
    qty:  ReleasesItem{i}Qty  -> ReleasesItemNo{i}Qty
"""

__all__ = [
    "MAX_ITEM_SLOTS",
    "NAME_FIELD_RULES",
    "QTY_FIELD_RULES",
    "coerce_quantity",
    "extract_line_items",
]

MAX_ITEM_SLOTS = 5

NAME_FIELD_RULES: tuple[str, ...] = ("ReleasesItemNo{i}", "ReleasesItem{i}Name")
QTY_FIELD_RULES: tuple[str, ...] = ("ReleasesItem{i}Qty", "ReleasesItemNo{i}Qty")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):  # list-like values
        return False


def _first_present(row: Mapping[str, Any], rules: tuple[str, ...], index: int) -> Any:
    for template in rules:
        value = row.get(template.format(i=index))
        if not _is_missing(value):
            return value
    return None


def coerce_quantity(value: Any) -> int | float | str:
    """Coerce a raw quantity into number, verbatim string or NO_QUANTITY.

    >>> coerce_quantity("5")
    5
    >>> coerce_quantity("5 boxes")
    '5 boxes'
    >>> coerce_quantity(None)
    ''
    """
    if _is_missing(value):
        return NO_QUANTITY
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return str(value)
        return int(value) if float(value).is_integer() else value
    text = str(value).strip()
    try:
        number = float(text)
    except ValueError:
        return text
    if not math.isfinite(number):
        # "inf" / "nan" parse but are not usable quantities
        return text
    return int(number) if number.is_integer() else number


def extract_line_items(row: Mapping[str, Any], max_slots: int = MAX_ITEM_SLOTS) -> list[LineItem]:
    """Collect the LineItems of a raw row, slot 1..max_slots in order.

    Slots without a usable name are skipped silently.
    """
    items: list[LineItem] = []
    for i in range(1, max_slots + 1):
        name = _first_present(row, NAME_FIELD_RULES, i)
        if name is None:
            continue
        name_text = str(name).strip()
        if not name_text:
            continue
        qty = coerce_quantity(_first_present(row, QTY_FIELD_RULES, i))
        items.append(LineItem(name=name_text, qty=qty))
    return items
