from __future__ import annotations

import re

from delivery_board.models.access_scope import AccessScope
from delivery_board.services.board import Board
from delivery_board.services.summary import render_summary_line

"""Unit tests for the SUMMARY line."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY rows=(\d+) records=(\d+) dropped=(\d+) customers=(\d+) "
    r"milestones=(\d+) visible=(\d+) scope=(admin|locked|unresolved|no_access)$"
)


def test_render_summary_line_admin(report_rows):
    board = Board(AccessScope(enabled=False, is_admin=True))
    state = board.load(report_rows)
    line = render_summary_line(state, board.visible())
    match = SUMMARY_PATTERN.match(line)
    assert match, line
    assert match.groups() == ("4", "4", "1", "2", "2", "2", "admin")


def test_render_summary_line_unresolved(report_rows):
    board = Board(AccessScope(enabled=True, customer_tokens=("nobody",)))
    state = board.load(report_rows)
    line = render_summary_line(state, board.visible())
    assert line == "SUMMARY rows=4 records=0 dropped=0 customers=0 milestones=0 visible=0 scope=unresolved"


def test_render_summary_line_empty_load():
    board = Board(AccessScope(enabled=False, is_admin=True))
    state = board.load([])
    assert SUMMARY_PATTERN.match(render_summary_line(state, []))
