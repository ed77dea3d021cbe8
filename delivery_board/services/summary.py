from __future__ import annotations

from ..models.filter_query import VisibleGroup
from .board import BoardState

"""Summary line rendering.

Format:
SUMMARY rows={rows} records={records} dropped={dropped} customers={customers}
milestones={milestones} visible={visible} scope={state}
"""


def render_summary_line(state: BoardState, visible: list[VisibleGroup]) -> str:
    """Render the SUMMARY line of one board run.

    ``rows`` counts fetched rows, ``records`` the records left after
    scoping, ``visible`` the customer/milestone groups after filtering.
    """
    return (
        f"SUMMARY rows={state.row_count} "
        f"records={len(state.resolution.records)} "
        f"dropped={state.dropped_count} "
        f"customers={len(state.grouped)} "
        f"milestones={state.milestone_count} "
        f"visible={len(visible)} "
        f"scope={state.resolution.state.value}"
    )
