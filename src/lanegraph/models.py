"""
Data models for commit graph layout.

This module contains the dataclasses that flow through the layout pipeline:
the commits consumed as input, the edges built between them, and the
per-row drawing instructions handed to a renderer.

Classes:
    Commit: A commit as read from history (input, never mutated).
    Edge: A connector from a child commit to one of its parents.
    GraphNode: Drawing instructions for one commit row (output).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, List, Optional


@dataclass(frozen=True)
class Commit:
    """
    A commit in the loaded history window.

    Only ``sha`` and ``parent_shas`` take part in the layout. Everything else
    is caller-owned metadata that is passed through to the output untouched.

    Attributes:
        sha: Full commit identifier, unique within the window.
        parent_shas: Ordered parent identifiers. The first entry is the
            first parent and defines the primary lineage.
        message: Full commit message.
        author: Author name.
        author_email: Author email address.
        author_date: Author timestamp, if known.
        committer: Committer name.
        committer_email: Committer email address.
        committer_date: Committer timestamp, if known.
    """

    sha: str
    parent_shas: List[str] = field(default_factory=list)
    message: str = ""
    author: str = ""
    author_email: str = ""
    author_date: Optional[datetime] = None
    committer: str = ""
    committer_email: str = ""
    committer_date: Optional[datetime] = None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def summary(self) -> str:
        """First line of the message."""
        return self.message.split("\n", 1)[0]

    @property
    def is_merge(self) -> bool:
        return len(self.parent_shas) > 1

    @property
    def is_root(self) -> bool:
        return not self.parent_shas


@dataclass(frozen=True)
class Edge:
    """
    A directed connector from a child commit to one of its parents.

    Only built when both ends are inside the loaded window.

    Attributes:
        child_row: Row of the child commit.
        parent_row: Row of the parent commit.
        child_column: Column the child occupies.
        parent_column: Column the parent occupies.
        color: Color class of the connector (the parent's lineage).
        is_first_parent: Whether this links the child to its first parent.
    """

    child_row: int
    parent_row: int
    child_column: int
    parent_column: int
    color: int
    is_first_parent: bool

    def spans(self, row: int) -> bool:
        """Whether the edge passes strictly between its two ends at ``row``."""
        return self.child_row < row < self.parent_row


@dataclass
class GraphNode:
    """
    Drawing instructions for one commit row.

    Attributes:
        id: The commit SHA.
        commit: The input commit, passed through for the renderer.
        column: Lane the commit dot sits in.
        color: Color class of the commit's lineage.
        branch_label: Branch name pointing at this commit, if any.
        line_from_top: Draw a vertical segment from the top of the row
            down to the dot.
        line_to_bottom: Draw a vertical segment from the dot down to the
            bottom of the row.
        pass_through_lanes: Columns of other lineages whose vertical lines
            cross this row without touching the dot.
        curves_to_bottom: Columns the dot curves into at the bottom of the
            row (merge fan-out), in parent order.
    """

    id: str
    commit: Commit
    column: int
    color: int = 0
    branch_label: Optional[str] = None
    line_from_top: bool = False
    line_to_bottom: bool = False
    pass_through_lanes: FrozenSet[int] = field(default_factory=frozenset)
    curves_to_bottom: List[int] = field(default_factory=list)

    @property
    def is_merge(self) -> bool:
        return self.commit.is_merge

    @property
    def short_sha(self) -> str:
        return self.commit.short_sha
