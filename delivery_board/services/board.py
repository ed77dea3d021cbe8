from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from ..config.loader import BoardConfig
from ..models.access_scope import AccessScope, ScopeResolution, ScopeState
from ..models.canonical_record import CanonicalRecord
from ..models.customer_group import CustomerGroup
from ..models.filter_query import FilterQuery, VisibleGroup
from .detail import TaskDetail, build_task_detail, find_task
from .filter import filter_groups
from .grouping import count_milestones, group_records
from .normalizer import normalize_rows
from .scope import apply_scope

"""View coordination for the delivery board.

Board owns the current BoardState. Every load builds a new state from
scratch (normalize -> scope -> group) and replaces the previous one as a
whole; filtering reads the state passed to it and never mutates it.
"""

__all__ = [
    "BoardState",
    "Board",
    "build_state",
    "MESSAGE_NO_DATA",
    "MESSAGE_NO_CUSTOMER_DATA",
    "MESSAGE_UNRESOLVED",
    "MESSAGE_NO_ACCESS",
    "MESSAGE_NO_MATCHES",
]

logger = logging.getLogger(__name__)

MESSAGE_NO_DATA = "No deliveries found."
MESSAGE_NO_CUSTOMER_DATA = "No deliveries found for this customer."
MESSAGE_UNRESOLVED = "This link does not match any customer."
MESSAGE_NO_ACCESS = "Access requires a customer link."
MESSAGE_NO_MATCHES = "No deliveries match the current filters."

RowSource = Callable[[], Iterable[Mapping[str, Any]]]


@dataclass(frozen=True)
class BoardState:
    """Result of one load: records, scope outcome and grouped structure."""
    records: list[CanonicalRecord]
    resolution: ScopeResolution
    grouped: dict[str, CustomerGroup]
    row_count: int = 0
    loaded_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def dropped_count(self) -> int:
        """Scoped records left out of grouping (blank customer or milestone)."""
        grouped = sum(g.record_count for g in self.grouped.values())
        return len(self.resolution.records) - grouped

    @property
    def milestone_count(self) -> int:
        return count_milestones(self.grouped)


def build_state(
    rows: Iterable[Mapping[str, Any]],
    scope: AccessScope,
    config: BoardConfig | None = None,
) -> BoardState:
    cfg = config or BoardConfig()
    rows = list(rows)
    records = normalize_rows(rows, max_item_slots=cfg.max_item_slots, date_fields=cfg.date_fields)
    resolution = apply_scope(records, scope)
    grouped = group_records(resolution.records)
    return BoardState(records=records, resolution=resolution, grouped=grouped, row_count=len(rows))


class Board:
    """Holds the scope of a view and the state of its latest load."""

    def __init__(self, scope: AccessScope, config: BoardConfig | None = None) -> None:
        self.scope = scope
        self.config = config or BoardConfig()
        self._state: BoardState | None = None

    @property
    def state(self) -> BoardState | None:
        return self._state

    def load(self, rows: Iterable[Mapping[str, Any]]) -> BoardState:
        state = build_state(rows, self.scope, self.config)
        self._state = state
        logger.debug(
            f"loaded rows={state.row_count} customers={len(state.grouped)} scope={state.resolution.state.value}"
        )
        return state

    def reload(self, source: RowSource) -> BoardState:
        """Fetch through ``source`` and replace the state.

        A failing source (FetchError) leaves the previous state untouched.
        """
        return self.load(source())

    def visible(self, query: FilterQuery | None = None) -> list[VisibleGroup]:
        if self._state is None:
            return []
        return filter_groups(self._state.grouped, self.scope, query)

    def task_detail(self, task_id: str | None) -> TaskDetail | None:
        """Detail of a deep-linked task, searched within the scoped records only."""
        if self._state is None:
            return None
        record = find_task(self._state.resolution.records, task_id)
        return build_task_detail(record) if record is not None else None

    @property
    def viewing_as(self) -> str:
        return self._state.resolution.display_name if self._state else ""

    def message(self, visible: list[VisibleGroup]) -> str | None:
        """Empty-state message for the renderer (None when there is something to show)."""
        if self._state is None:
            return MESSAGE_NO_DATA
        state = self._state.resolution.state
        if state is ScopeState.NO_ACCESS:
            return MESSAGE_NO_ACCESS
        if state is ScopeState.UNRESOLVED:
            return MESSAGE_UNRESOLVED
        if visible:
            return None
        if not self._state.records:
            return MESSAGE_NO_DATA
        if state is ScopeState.LOCKED and not self._state.grouped:
            return MESSAGE_NO_CUSTOMER_DATA
        if not self._state.grouped:
            return MESSAGE_NO_DATA
        return MESSAGE_NO_MATCHES
