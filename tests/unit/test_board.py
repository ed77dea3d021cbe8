from __future__ import annotations

import pytest

from delivery_board.api.client import FetchError, FetchErrorKind
from delivery_board.config.loader import BoardConfig
from delivery_board.models.access_scope import AccessScope, ScopeState
from delivery_board.models.filter_query import FilterQuery
from delivery_board.services.board import (
    MESSAGE_NO_ACCESS,
    MESSAGE_NO_CUSTOMER_DATA,
    MESSAGE_NO_DATA,
    MESSAGE_NO_MATCHES,
    MESSAGE_UNRESOLVED,
    Board,
    build_state,
)

ADMIN = AccessScope(enabled=False, is_admin=True)


def test_build_state_counts(report_rows):
    state = build_state(report_rows, ADMIN)
    assert state.row_count == 4
    assert len(state.records) == 4
    assert list(state.grouped) == ["MasTec, Inc.", "Acme Renewables LLC"]
    assert state.dropped_count == 1  # blank milestone
    assert state.milestone_count == 2
    assert state.resolution.state is ScopeState.ADMIN


def test_build_state_uses_config_slots():
    state = build_state([{"ReleasesItemNo1": "a", "ReleasesItemNo2": "b"}], ADMIN, BoardConfig(max_item_slots=1))
    assert [i.name for i in state.records[0].items] == ["a"]


def test_board_locked_view(report_rows):
    board = Board(AccessScope(enabled=True, customer_tokens=("mastec-inc",)))
    board.load(report_rows)
    visible = board.visible(FilterQuery(customer="acme"))  # ignored for a locked scope
    assert [(g.customer, g.milestone) for g in visible] == [("MasTec, Inc.", "Union Ridge")]
    assert board.viewing_as == "MasTec, Inc."
    assert board.message(visible) is None


def test_board_reload_replaces_state(report_rows):
    board = Board(ADMIN)
    first = board.reload(lambda: report_rows)
    second = board.reload(lambda: report_rows[:1])
    assert board.state is second
    assert second is not first
    assert len(board.visible()) == 1


def test_board_failed_reload_keeps_previous_state(report_rows):
    board = Board(ADMIN)
    state = board.load(report_rows)

    def failing():
        raise FetchError(FetchErrorKind.NETWORK, "refused")

    with pytest.raises(FetchError):
        board.reload(failing)
    assert board.state is state


def test_board_before_load():
    board = Board(ADMIN)
    assert board.visible() == []
    assert board.task_detail("1") is None
    assert board.viewing_as == ""
    assert board.message([]) == MESSAGE_NO_DATA


def test_messages(report_rows):
    gate = Board(AccessScope(enabled=False, is_admin=False))
    gate.load(report_rows)
    assert gate.visible() == []
    assert gate.message(gate.visible()) == MESSAGE_NO_ACCESS

    unresolved = Board(AccessScope(enabled=True, customer_tokens=("nobody",)))
    unresolved.load(report_rows)
    assert unresolved.visible() == []
    assert unresolved.message([]) == MESSAGE_UNRESOLVED

    empty = Board(ADMIN)
    empty.load([])
    assert empty.message([]) == MESSAGE_NO_DATA

    admin = Board(ADMIN)
    admin.load(report_rows)
    assert admin.message(admin.visible(FilterQuery(milestone="zzz"))) == MESSAGE_NO_MATCHES


def test_locked_customer_without_groupable_records():
    rows = [{"CustomerName": "Acme", "CustomerNumber": "5", "MilestoneName": ""}]
    board = Board(AccessScope(enabled=True, customer_tokens=("5",)))
    board.load(rows)
    assert board.state.resolution.state is ScopeState.LOCKED
    assert board.message(board.visible()) == MESSAGE_NO_CUSTOMER_DATA


def test_task_detail_is_scoped(report_rows):
    board = Board(AccessScope(enabled=True, customer_tokens=("86",)))
    board.load(report_rows)
    assert board.task_detail("17096").title == "MasTec Union Ridge CMS From AWD"
    # task of another customer is not reachable through a locked link
    assert board.task_detail("18001") is None
