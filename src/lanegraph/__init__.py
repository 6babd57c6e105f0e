"""
lanegraph - Commit graph lane layout

A Python library that turns a reverse-chronological commit list into
per-row drawing instructions for a ``git log --graph`` style view.

Example:
    >>> from lanegraph import Commit, compute_layout
    >>> nodes = compute_layout([
    ...     Commit("c3", ["c2"]),
    ...     Commit("c2", ["c1"]),
    ...     Commit("c1", []),
    ... ])
    >>> [node.column for node in nodes]
    [0, 0, 0]

Debug Mode Example:
    >>> layout = CommitGraphLayout(debug=True)
    >>> result = layout.layout(commits)
    >>> print(result.trace.summary())
"""

from .arena import ColumnArena
from .branches import BranchRef, branch_heads, sort_branches
from .edges import build_edges
from .graph import CommitGraph, create_graph
from .lanes import LaneAllocator, LaneAssignment, assign_lanes
from .layout import CommitGraphLayout, LayoutResult, compute_layout
from .models import Commit, Edge, GraphNode
from .nodes import build_nodes
from .parser import LOG_FORMAT, LogParser, ParseError, parse_log
from .session import GraphSession, SessionSnapshot
from .tracer import ArenaEvent, LayoutTrace, PipelineStage

__version__ = "0.1.0"

__all__ = [
    # Main API
    "CommitGraphLayout",
    "LayoutResult",
    "compute_layout",
    # Models
    "Commit",
    "Edge",
    "GraphNode",
    # Pipeline stages
    "ColumnArena",
    "LaneAllocator",
    "LaneAssignment",
    "assign_lanes",
    "build_edges",
    "build_nodes",
    # Ancestry checks
    "CommitGraph",
    "create_graph",
    # Branch labels
    "BranchRef",
    "branch_heads",
    "sort_branches",
    # Parser
    "LogParser",
    "ParseError",
    "parse_log",
    "LOG_FORMAT",
    # Sessions
    "GraphSession",
    "SessionSnapshot",
    # Debug/Tracing
    "LayoutTrace",
    "ArenaEvent",
    "PipelineStage",
]
