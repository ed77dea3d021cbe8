"""Domain models for the delivery board.

This package contains the entity model produced by the normalization and
grouping pipeline, the access scope types and the value objects handed to
the renderer.
"""

from .access_scope import AccessScope, CustomerMatch, RouteParams, ScopeResolution, ScopeState
from .canonical_record import CanonicalRecord
from .customer_group import CustomerGroup
from .error_record import ErrorRecord
from .filter_query import FilterQuery, VisibleGroup
from .line_item import NO_QUANTITY, LineItem
from .status_summary import StatusSummary, StyleClass

__all__ = [
    # Records
    "LineItem",
    "NO_QUANTITY",
    "CanonicalRecord",
    "CustomerGroup",
    # Scope
    "RouteParams",
    "AccessScope",
    "CustomerMatch",
    "ScopeState",
    "ScopeResolution",
    # Display
    "StatusSummary",
    "StyleClass",
    "FilterQuery",
    "VisibleGroup",
    # Logging
    "ErrorRecord",
]
