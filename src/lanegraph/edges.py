"""
Edge building for commit graphs.

Turns the lane assignment plus each commit's parent links into one Edge per
(child, parent) pair whose both ends are inside the loaded window.
"""

import logging
from typing import List, Sequence

from .lanes import LaneAssignment
from .models import Commit, Edge

logger = logging.getLogger(__name__)


def build_edges(commits: Sequence[Commit], lanes: LaneAssignment) -> List[Edge]:
    """
    Build the edge list for a laid-out commit window.

    Parents outside the window get no edge, so their lineage appears to end
    at the window boundary. Repeated occurrences of a SHA contribute no
    edges; the first occurrence already carries them.

    Args:
        commits: Commits ordered newest first.
        lanes: Column and color assignment for the same commits.

    Returns:
        Edges ordered by child row, then by parent order.
    """
    edges: List[Edge] = []

    for child_row, commit in enumerate(commits):
        if lanes.rows.get(commit.sha) != child_row:
            continue
        child_col = lanes.columns.get(commit.sha)
        if child_col is None:
            continue

        seen = set()
        for index, parent in enumerate(commit.parent_shas):
            if parent in seen:
                continue
            seen.add(parent)

            parent_row = lanes.rows.get(parent)
            parent_col = lanes.columns.get(parent)
            if parent_row is None or parent_col is None:
                continue

            color = lanes.colors.get(parent, lanes.colors.get(commit.sha, 0))
            edges.append(
                Edge(
                    child_row=child_row,
                    parent_row=parent_row,
                    child_column=child_col,
                    parent_column=parent_col,
                    color=color,
                    is_first_parent=index == 0,
                )
            )

    logger.debug("Built %d edges for %d commits", len(edges), len(commits))
    return edges
