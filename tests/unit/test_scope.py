from __future__ import annotations

import pytest

from delivery_board.models.access_scope import AccessScope, RouteParams, ScopeState
from delivery_board.services.normalizer import normalize_rows
from delivery_board.services.scope import (
    apply_scope,
    build_route_query,
    customer_slugs,
    name_acronym,
    parse_route,
    resolve_customer,
    resolve_scope,
    tokenize_name,
)


@pytest.fixture()
def records():
    return normalize_rows([
        {"Number": "1", "CustomerName": "MasTec, Inc.", "CustomerNumber": "86", "MilestoneName": "Union Ridge"},
        {"Number": "2", "CustomerName": "Acme Renewables LLC", "CustomerNumber": "112", "MilestoneName": "P1"},
        {"Number": "3", "CustomerName": "MasTec, Inc.", "CustomerNumber": "86", "MilestoneName": "Other"},
        {"Number": "4", "CustomerName": "Great Plains Wind Co.", "CustomerNumber": "301", "MilestoneName": "P1"},
    ])


# --- route parsing -------------------------------------------------------

def test_parse_route_full_url():
    params = parse_route("https://board.example.com/?c= MasTec-Inc &m=Union%20Ridge#task=17096")
    assert params == RouteParams(customer_token="mastec-inc", is_admin=False, milestone="Union Ridge", task_id="17096")


def test_parse_route_bare_query_and_admin():
    params = parse_route("admin=true&c=86")
    assert params.is_admin is True
    assert params.customer_token == "86"


def test_parse_route_bare_query_with_fragment():
    params = parse_route("c=86#task=17096")
    assert params.customer_token == "86"
    assert params.task_id == "17096"
    assert resolve_scope(params).enabled is True


def test_parse_route_admin_must_be_literal_true():
    assert parse_route("?admin=1").is_admin is False
    assert parse_route("?admin=TRUE").is_admin is False


def test_parse_route_empty():
    assert parse_route("") == RouteParams()
    assert parse_route("?m=%20%20#task=") == RouteParams()


# --- scope derivation ----------------------------------------------------

def test_admin_flag_wins_over_token():
    scope = resolve_scope(RouteParams(customer_token="86", is_admin=True))
    assert scope == AccessScope(enabled=False, is_admin=True)


def test_single_token_enables_scope():
    scope = resolve_scope(RouteParams(customer_token="mastec-inc"))
    assert scope == AccessScope(enabled=True, is_admin=False, customer_tokens=("mastec-inc",))


def test_comma_list_tokens():
    scope = resolve_scope(RouteParams(customer_token="86, acme,,"))
    assert scope.customer_tokens == ("86", "acme")


def test_no_token_is_no_access_gate():
    scope = resolve_scope(RouteParams())
    assert scope.enabled is False
    assert scope.is_admin is False
    assert scope.is_gate


# --- slugs ---------------------------------------------------------------

def test_tokenize_and_slugs_for_mastec():
    assert tokenize_name("MasTec, Inc.") == ["mastec", "inc"]
    assert name_acronym("MasTec, Inc.") == "mi"
    assert customer_slugs("MasTec, Inc.") == ["mastec", "mastec-inc", "mastec-inc", "mastec-inc", "mi"]


def test_slugs_long_name():
    slugs = customer_slugs("Great Plains Wind Co.")
    assert slugs == ["great", "great-plains", "great-plains-wind", "great-plains-wind-co", "gpwc"]


def test_slugs_blank_name():
    assert customer_slugs("  ") == []


# --- customer resolution -------------------------------------------------

def test_resolve_numeric_token(records):
    match = resolve_customer(records, "86")
    assert match.resolved
    assert match.display_name == "MasTec, Inc."


def test_resolve_numeric_token_unknown(records):
    match = resolve_customer(records, "999")
    assert not match.resolved
    assert match.display_name == ""


@pytest.mark.parametrize("token", ["mastec", "mastec-inc", "mi", "MasTec"])
def test_resolve_slug_tokens(records, token):
    assert resolve_customer(records, token).matched_customer_key == "MasTec, Inc."


def test_resolve_acronym(records):
    assert resolve_customer(records, "gpwc").matched_customer_key == "Great Plains Wind Co."


def test_resolve_substring_fallback(records):
    # token contained in the full slug
    assert resolve_customer(records, "renewables").matched_customer_key == "Acme Renewables LLC"
    # full slug contained in the token
    assert resolve_customer(records, "mastec-inc-west").matched_customer_key == "MasTec, Inc."


def test_resolve_unknown_token(records):
    match = resolve_customer(records, "nobody")
    assert match.matched_customer_key is None
    assert match.display_name == ""


# --- applying the scope --------------------------------------------------

def test_apply_scope_admin_sees_all(records):
    res = apply_scope(records, AccessScope(enabled=False, is_admin=True))
    assert res.state is ScopeState.ADMIN
    assert len(res.records) == 4


def test_apply_scope_gate_sees_nothing(records):
    res = apply_scope(records, AccessScope(enabled=False, is_admin=False))
    assert res.state is ScopeState.NO_ACCESS
    assert res.records == []


def test_apply_scope_numeric_restricts_by_customer_number(records):
    res = apply_scope(records, AccessScope(enabled=True, customer_tokens=("86",)))
    assert res.state is ScopeState.LOCKED
    assert res.display_name == "MasTec, Inc."
    assert [r.task_id for r in res.records] == ["1", "3"]
    assert all(r.customer_number == "86" for r in res.records)


def test_apply_scope_fails_closed(records):
    res = apply_scope(records, AccessScope(enabled=True, customer_tokens=("nobody",)))
    assert res.state is ScopeState.UNRESOLVED
    assert res.records == []
    assert res.display_name == ""
    assert res.locked


def test_apply_scope_token_list_is_union(records):
    res = apply_scope(records, AccessScope(enabled=True, customer_tokens=("acme", "86", "nobody")))
    assert res.state is ScopeState.LOCKED
    assert [r.task_id for r in res.records] == ["1", "2", "3"]
    assert res.display_name == "Acme Renewables LLC, MasTec, Inc."


def test_apply_scope_on_empty_records():
    res = apply_scope([], AccessScope(enabled=True, customer_tokens=("86",)))
    assert res.state is ScopeState.UNRESOLVED
    assert res.records == []


# --- route rebuild -------------------------------------------------------

def test_build_route_query_updates():
    assert build_route_query("?c=86&m=Union", m=None) == "c=86"
    assert build_route_query("c=86", m="Phase 1") == "c=86&m=Phase+1"
    assert build_route_query("?c=86&admin=true", c=None) == "admin=true"
    assert build_route_query("", c="acme") == "c=acme"
    assert build_route_query("?c=86") == "c=86"
