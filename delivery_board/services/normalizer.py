from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import pandas as pd

from ..models.canonical_record import CanonicalRecord
from .field_extractor import MAX_ITEM_SLOTS, extract_line_items

"""Row normalization: raw report row -> CanonicalRecord.

normalize() never fails and never mutates its input. Loosely typed rows stop
here; everything downstream works on CanonicalRecord.

Dates are reported as "MM/DD/YYYY hh:mm:ss AM" or ISO strings. Both are
formatted as YYYY-MM-DD for display; anything unparseable is kept verbatim.
"""

__all__ = [
    "DEFAULT_DATE_FIELDS",
    "format_date",
    "normalize",
    "normalize_rows",
]

logger = logging.getLogger(__name__)

DEFAULT_DATE_FIELDS: tuple[str, ...] = ("DueDate", "CompletionDate", "ReleasesContractDate")

_US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def format_date(value: Any) -> str:
    """Format a report date as YYYY-MM-DD, falling back to the raw text.

    >>> format_date("08/26/2025 11:59:59 PM")
    '2025-08-26'
    >>> format_date("soon")
    'soon'
    """
    if value is None:
        return ""
    if isinstance(value, float) and value != value:  # NaN
        return ""
    if hasattr(value, "strftime"):
        try:
            return value.strftime("%Y-%m-%d")
        except ValueError:  # NaT
            return ""
    text = str(value).strip()
    if not text:
        return ""
    m = _US_DATE.match(text)
    if m:
        mm, dd, yyyy = m.groups()
        return f"{yyyy}-{mm.zfill(2)}-{dd.zfill(2)}"
    if _ISO_DATE.match(text):
        parsed = pd.to_datetime(text, errors="coerce")
        if not pd.isna(parsed):
            return parsed.strftime("%Y-%m-%d")
    return str(value)


def normalize(
    row: Mapping[str, Any],
    *,
    max_item_slots: int = MAX_ITEM_SLOTS,
    date_fields: Sequence[str] = DEFAULT_DATE_FIELDS,
) -> CanonicalRecord:
    fields = dict(row)
    items = tuple(extract_line_items(fields, max_item_slots))
    dates = {name: format_date(fields.get(name)) for name in date_fields}
    return CanonicalRecord(fields=fields, items=items, dates=dates)


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    max_item_slots: int = MAX_ITEM_SLOTS,
    date_fields: Sequence[str] = DEFAULT_DATE_FIELDS,
) -> list[CanonicalRecord]:
    """Normalize every mapping in ``rows``; non-mapping entries are skipped."""
    records: list[CanonicalRecord] = []
    skipped = 0
    for row in rows:
        if not isinstance(row, Mapping):
            skipped += 1
            continue
        records.append(normalize(row, max_item_slots=max_item_slots, date_fields=date_fields))
    if skipped:
        logger.warning(f"skipped {skipped} report entries that are not objects")
    logger.debug(f"normalized {len(records)} rows")
    return records
