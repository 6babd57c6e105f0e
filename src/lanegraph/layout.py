"""
Layout module for commit graphs.

Runs the full pipeline over a commit window:
- Lane allocation (columns and color classes)
- Edge building
- Per-row drawing instructions
- Optional order validation using networkx
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .edges import build_edges
from .graph import CommitGraph
from .lanes import LaneAllocator
from .models import Commit, Edge, GraphNode
from .nodes import build_nodes
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Result of the layout algorithm."""

    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    columns: Dict[str, int] = field(default_factory=dict)
    colors: Dict[str, int] = field(default_factory=dict)
    width: int = 0
    order_violations: List[Tuple[str, str]] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)
    trace: Optional[LayoutTrace] = None

    def node(self, sha: str) -> Optional[GraphNode]:
        """Look up the first node for ``sha``."""
        for node in self.nodes:
            if node.id == sha:
                return node
        return None


class CommitGraphLayout:
    """
    Commit graph layout engine.

    Every call to layout() starts from a fresh column arena, so results
    depend only on the arguments.

    Args:
        validate_order: Check that parents are listed after their children
            and report offending links in the result.
        max_width_warning: Log a warning when the graph grows wider than
            this many columns.
        debug: Record a LayoutTrace of every arena transition.
    """

    def __init__(
        self,
        validate_order: bool = True,
        max_width_warning: Optional[int] = None,
        debug: bool = False,
    ):
        if max_width_warning is not None and max_width_warning < 1:
            raise ValueError("max_width_warning must be a positive integer")

        self.validate_order = validate_order
        self.max_width_warning = max_width_warning
        self.debug = debug

    def layout(
        self,
        commits: Sequence[Commit],
        branch_heads: Optional[Mapping[str, str]] = None,
    ) -> LayoutResult:
        """
        Compute the graph layout for a commit window.

        Args:
            commits: Commits ordered newest first
            branch_heads: Optional SHA -> branch label map

        Returns:
            LayoutResult with one GraphNode per commit, in input order
        """
        trace = LayoutTrace(commit_count=len(commits)) if self.debug else None
        result = LayoutResult(trace=trace)
        if not commits:
            return result

        if trace is not None:
            trace.add_stage("indexed", {"commits": len(commits)})

        lanes = LaneAllocator(trace=trace).allocate(commits)
        edges = build_edges(commits, lanes)
        if trace is not None:
            trace.add_stage("edges_built", {"edges": len(edges)})

        nodes = build_nodes(commits, lanes, edges, branch_heads)
        if trace is not None:
            trace.add_stage("nodes_built", {"nodes": len(nodes)})

        result.nodes = nodes
        result.edges = edges
        result.columns = lanes.columns
        result.colors = lanes.colors
        result.width = lanes.width
        result.duplicates = lanes.duplicates

        if self.validate_order:
            result.order_violations = CommitGraph(commits).order_violations()
            if result.order_violations:
                logger.warning(
                    "%d parent links point upwards; input is not in "
                    "reverse-topological order",
                    len(result.order_violations),
                )

        if self.max_width_warning is not None and lanes.width > self.max_width_warning:
            logger.warning(
                "Graph is %d columns wide (warning threshold %d)",
                lanes.width,
                self.max_width_warning,
            )

        logger.debug(
            "Laid out %d commits: %d columns, %d edges",
            len(nodes),
            lanes.width,
            len(edges),
        )
        return result


def compute_layout(
    commits: Sequence[Commit],
    branch_heads: Optional[Mapping[str, str]] = None,
) -> List[GraphNode]:
    """
    Convenience function to lay out a commit window.

    Args:
        commits: Commits ordered newest first
        branch_heads: Optional SHA -> branch label map

    Returns:
        List of GraphNode objects in input order
    """
    return CommitGraphLayout().layout(commits, branch_heads).nodes
