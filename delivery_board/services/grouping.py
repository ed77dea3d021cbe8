from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models.canonical_record import CanonicalRecord
from ..models.customer_group import CustomerGroup

"""Grouping of canonical records by customer, then milestone.

Order of customers and of milestones follows first occurrence in the input
(dicts keep insertion order). Records keep their input order inside a
bucket; display sorting is left to the renderer.
"""

__all__ = [
    "group_records",
    "count_milestones",
]

logger = logging.getLogger(__name__)


def group_records(records: Iterable[CanonicalRecord]) -> dict[str, CustomerGroup]:
    """Bucket records as ``{customer: CustomerGroup}``.

    Records with a blank customer or milestone name are dropped.
    """
    grouped: dict[str, CustomerGroup] = {}
    dropped = 0
    for record in records:
        customer = record.customer_name
        milestone = record.milestone_name
        if not customer or not milestone:
            dropped += 1
            continue
        group = grouped.get(customer)
        if group is None:
            group = CustomerGroup(address=record.address)
            grouped[customer] = group
        group.add(milestone, record)
    if dropped:
        logger.debug(f"dropped {dropped} records without customer or milestone")
    return grouped


def count_milestones(grouped: dict[str, CustomerGroup]) -> int:
    return sum(len(g.milestones) for g in grouped.values())
