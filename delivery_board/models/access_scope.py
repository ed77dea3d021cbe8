from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .canonical_record import CanonicalRecord

"""Access scope models for the delivery board.

The scope is derived once from the route parameters when a view starts and
restricts the view to the customer(s) named by the ``c`` token.
"""

__all__ = [
    "RouteParams",
    "AccessScope",
    "CustomerMatch",
    "ScopeState",
    "ScopeResolution",
]


@dataclass(frozen=True)
class RouteParams:
    """Parameters read from the query string and hash fragment."""
    customer_token: str = ""  # ?c= (trimmed, lowercased)
    is_admin: bool = False  # ?admin=true
    milestone: str | None = None  # ?m= pre-applied milestone filter
    task_id: str | None = None  # #task=<id> deep link


@dataclass(frozen=True)
class AccessScope:
    """Customer restriction of a view.

    enabled=True: only the customer(s) named by ``customer_tokens`` are visible.
    enabled=False and is_admin=True: unrestricted staff view.
    enabled=False and is_admin=False: no-access gate (nothing is visible).
    """
    enabled: bool
    is_admin: bool = False
    customer_tokens: tuple[str, ...] = ()

    @property
    def is_gate(self) -> bool:
        return not self.enabled and not self.is_admin


@dataclass(frozen=True)
class CustomerMatch:
    matched_customer_key: str | None
    display_name: str = ""

    @property
    def resolved(self) -> bool:
        return self.matched_customer_key is not None


class ScopeState(Enum):
    ADMIN = "admin"
    LOCKED = "locked"  # enabled and resolved
    UNRESOLVED = "unresolved"  # enabled, token matches no customer
    NO_ACCESS = "no_access"  # no token and not admin


@dataclass(frozen=True)
class ScopeResolution:
    """Outcome of applying a scope to the loaded records."""
    state: ScopeState
    records: list[CanonicalRecord] = field(default_factory=list)
    display_name: str = ""  # "viewing as" label
    matches: tuple[CustomerMatch, ...] = ()

    @property
    def locked(self) -> bool:
        return self.state in (ScopeState.LOCKED, ScopeState.UNRESOLVED)
