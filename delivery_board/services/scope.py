from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from urllib.parse import parse_qs, urlencode, urlsplit

from ..models.access_scope import (
    AccessScope,
    CustomerMatch,
    RouteParams,
    ScopeResolution,
    ScopeState,
)
from ..models.canonical_record import CanonicalRecord

"""Access scope resolution.

Route links restrict a board to one customer:

    ?c=mastec-inc        name based slug
    ?c=86                customer number
    ?c=86,acme           several customers (OR)
    ?admin=true          staff view, all customers
    ?m=Union Ridge       pre-applied milestone filter
    #task=17096          open the detail view of a task

Resolution fails closed: a token that matches no customer yields an empty
record set, never the unrestricted one.
"""

__all__ = [
    "parse_route",
    "resolve_scope",
    "tokenize_name",
    "name_acronym",
    "customer_slugs",
    "resolve_customer",
    "apply_scope",
    "build_route_query",
]

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_WORD_INITIAL_CAPITAL = re.compile(r"\b[A-Z]")
_NUMERIC = re.compile(r"^\d+$")


def _first(values: dict[str, list[str]], key: str) -> str:
    found = values.get(key)
    return found[0] if found else ""


def parse_route(url: str) -> RouteParams:
    """Parse route parameters from a URL, ``?query#hash`` or bare query string."""
    url = (url or "").strip()
    if "?" not in url and "://" not in url:
        url = "?" + url
    parts = urlsplit(url)
    query = parse_qs(parts.query, keep_blank_values=True)
    fragment = parse_qs(parts.fragment, keep_blank_values=True)

    token = _first(query, "c").strip().lower()
    milestone = _first(query, "m").strip()
    task = _first(fragment, "task").strip()
    return RouteParams(
        customer_token=token,
        is_admin=_first(query, "admin") == "true",
        milestone=milestone or None,
        task_id=task or None,
    )


def resolve_scope(params: RouteParams) -> AccessScope:
    """Derive the access scope from route parameters.

    The admin flag wins over any customer token. Without either, the scope is
    disabled and non-admin (the no-access gate).
    """
    if params.is_admin:
        return AccessScope(enabled=False, is_admin=True)
    tokens = tuple(t.strip().lower() for t in params.customer_token.split(",") if t.strip())
    if tokens:
        return AccessScope(enabled=True, is_admin=False, customer_tokens=tokens)
    return AccessScope(enabled=False, is_admin=False)


def tokenize_name(name: str) -> list[str]:
    """Lowercase alphanumeric words of a customer name.

    >>> tokenize_name("MasTec, Inc.")
    ['mastec', 'inc']
    """
    return [w for w in _NON_ALNUM.split((name or "").lower()) if w]


def name_acronym(name: str) -> str:
    """Word-initial capitals of the original name, lowercased ("MasTec, Inc." -> "mi")."""
    return "".join(_WORD_INITIAL_CAPITAL.findall(name or "")).lower()


def customer_slugs(name: str) -> list[str]:
    """Candidate tokens for a customer name.

    First 1, 2, 3 and all words joined with '-', then the acronym. Blank
    candidates are left out.
    """
    words = tokenize_name(name)
    candidates = [
        "-".join(words[:1]),
        "-".join(words[:2]),
        "-".join(words[:3]),
        "-".join(words),
        name_acronym(name),
    ]
    return [c for c in candidates if c]


def resolve_customer(records: Sequence[CanonicalRecord], token: str) -> CustomerMatch:
    """Resolve a route token (number, slug or acronym) to a customer."""
    token = (token or "").strip().lower()
    if not token:
        return CustomerMatch(None, "")

    if _NUMERIC.match(token):
        for record in records:
            if record.customer_number == token:
                name = record.customer_name
                return CustomerMatch(name or record.customer_number, name)
        return CustomerMatch(None, "")

    for record in records:
        name = record.customer_name
        if name and token in customer_slugs(name):
            return CustomerMatch(name, name)

    for record in records:
        name = record.customer_name
        full = "-".join(tokenize_name(name))
        if full and (token in full or full in token):
            return CustomerMatch(name, name)

    return CustomerMatch(None, "")


def _records_for_token(
    records: Sequence[CanonicalRecord], token: str, match: CustomerMatch
) -> list[CanonicalRecord]:
    if _NUMERIC.match(token):
        return [r for r in records if r.customer_number == token]
    if not match.resolved:
        return []
    return [r for r in records if r.customer_name == match.matched_customer_key]


def apply_scope(records: Sequence[CanonicalRecord], scope: AccessScope) -> ScopeResolution:
    """Restrict ``records`` to what ``scope`` allows.

    Several tokens are OR-matched; records keep their input order.
    """
    if scope.is_admin and not scope.enabled:
        return ScopeResolution(ScopeState.ADMIN, list(records), display_name="")
    if scope.is_gate:
        logger.debug("no customer token and not admin -> no access")
        return ScopeResolution(ScopeState.NO_ACCESS, [], display_name="")

    matches: list[CustomerMatch] = []
    allowed: set[int] = set()
    for raw in scope.customer_tokens:
        token = raw.strip().lower()
        match = resolve_customer(records, token)
        matches.append(match)
        allowed.update(id(r) for r in _records_for_token(records, token, match))

    resolved = [m for m in matches if m.resolved]
    names: list[str] = []
    for m in resolved:
        if m.display_name and m.display_name not in names:
            names.append(m.display_name)

    visible = [r for r in records if id(r) in allowed]
    if not resolved:
        logger.warning(f"customer token did not resolve: {','.join(scope.customer_tokens)}")
        return ScopeResolution(ScopeState.UNRESOLVED, [], display_name="", matches=tuple(matches))
    return ScopeResolution(
        ScopeState.LOCKED,
        visible,
        display_name=", ".join(names),
        matches=tuple(matches),
    )


def build_route_query(current: str, *, c: str | None = "", m: str | None = "") -> str:
    """Rebuild a query string after updating ``c`` / ``m``.

    ``None`` deletes the key, a non-empty string sets it, an empty string
    leaves it untouched.
    """
    current = current or ""
    params = parse_qs(urlsplit(current if "?" in current else "?" + current).query, keep_blank_values=True)
    flat = {k: v[0] for k, v in params.items() if v}
    for key, value in (("c", c), ("m", m)):
        if value is None:
            flat.pop(key, None)
        elif value:
            flat[key] = value
    return urlencode(flat)
