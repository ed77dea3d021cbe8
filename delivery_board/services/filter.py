from __future__ import annotations

from ..models.access_scope import AccessScope
from ..models.customer_group import CustomerGroup
from ..models.filter_query import FilterQuery, VisibleGroup
from .status import summarize_status

__all__ = [
    "filter_groups",
]


def filter_groups(
    grouped: dict[str, CustomerGroup],
    scope: AccessScope,
    query: FilterQuery | None = None,
) -> list[VisibleGroup]:
    """Apply the free-text filters to the grouped structure.

    Customer and milestone are matched independently (case-insensitive
    substring) and both must pass. A locked scope has already narrowed the
    customers, so the customer query is ignored then. Empty buckets are not
    emitted.
    """
    query = query or FilterQuery()
    customer_q = "" if scope.enabled else query.customer.strip().lower()
    milestone_q = query.milestone.strip().lower()

    visible: list[VisibleGroup] = []
    for customer, group in grouped.items():
        if customer_q and customer_q not in customer.lower():
            continue
        for milestone, records in group.milestones.items():
            if milestone_q and milestone_q not in milestone.lower():
                continue
            if not records:
                continue
            visible.append(
                VisibleGroup(
                    customer=customer,
                    milestone=milestone,
                    address=group.address,
                    records=list(records),
                    status=summarize_status(records),
                )
            )
    return visible
