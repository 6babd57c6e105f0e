"""
Lane allocation for commit graphs.

Walks the commits newest to oldest and gives every commit a column and a
color class. First parents inherit their child's column so a lineage runs
straight down; other parents of a merge open a lane of their own.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .arena import ColumnArena
from .models import Commit
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)


@dataclass
class LaneAssignment:
    """
    Result of lane allocation.

    Attributes:
        rows: SHA -> row of its first occurrence in the input.
        columns: SHA -> column index.
        colors: SHA -> color class.
        width: Number of columns the arena grew to.
        duplicates: SHAs that appeared more than once in the input.
    """

    rows: Dict[str, int] = field(default_factory=dict)
    columns: Dict[str, int] = field(default_factory=dict)
    colors: Dict[str, int] = field(default_factory=dict)
    width: int = 0
    duplicates: List[str] = field(default_factory=list)


def index_rows(commits: Sequence[Commit]) -> Dict[str, int]:
    """Map each SHA to the row where it first appears."""
    rows: Dict[str, int] = {}
    for row, commit in enumerate(commits):
        rows.setdefault(commit.sha, row)
    return rows


class LaneAllocator:
    """
    Greedy column assignment over commits in reverse-topological order.

    A single forward pass: each commit either reuses the column a descendant
    reserved for it or opens a new lane in the leftmost free slot. Columns
    are released as soon as the lineage occupying them ends.

    Args:
        trace: Optional trace receiving every arena transition.
    """

    def __init__(self, trace: Optional[LayoutTrace] = None):
        self.trace = trace

    def allocate(self, commits: Sequence[Commit]) -> LaneAssignment:
        """
        Assign a column and a color class to every commit.

        Args:
            commits: Commits ordered newest first.

        Returns:
            LaneAssignment with the column and color maps.
        """
        arena = ColumnArena(trace=self.trace)
        result = LaneAssignment(rows=index_rows(commits))
        columns = result.columns
        colors = result.colors
        next_color = 0

        for row, commit in enumerate(commits):
            arena.row = row
            sha = commit.sha
            if result.rows[sha] != row:
                # Repeated identity: render in the first occurrence's lane
                # and leave the arena alone.
                result.duplicates.append(sha)
                continue

            if sha in columns:
                # Reserved by a descendant's first-parent link
                col = columns[sha]
            else:
                # New branch tip
                col = arena.find_free_column()
                columns[sha] = col
                colors[sha] = next_color
                next_color += 1
            arena.occupy(col, sha)

            parents = commit.parent_shas
            if parents and parents[0] not in columns:
                columns[parents[0]] = col
                colors[parents[0]] = colors.get(sha, 0)

            for parent in parents[1:]:
                if parent in columns or parent not in result.rows:
                    continue
                parent_col = arena.find_free_column()
                columns[parent] = parent_col
                colors[parent] = next_color
                next_color += 1
                arena.occupy(parent_col, parent)

            if not parents or columns[parents[0]] != col:
                arena.free(col)

        result.width = arena.width
        if result.duplicates:
            logger.warning(
                "Duplicate commits in input, keeping first occurrence: %s",
                ", ".join(sha[:7] for sha in result.duplicates),
            )
        if self.trace is not None:
            self.trace.add_stage(
                "lanes_assigned",
                {"width": arena.width, "colors": next_color},
                arena,
            )
        logger.debug(
            "Assigned %d commits to %d columns with %d color classes",
            len(commits),
            arena.width,
            next_color,
        )
        return result


def assign_lanes(commits: Sequence[Commit]) -> LaneAssignment:
    """
    Convenience function to run lane allocation.

    Args:
        commits: Commits ordered newest first

    Returns:
        LaneAssignment for the commits
    """
    return LaneAllocator().allocate(commits)
