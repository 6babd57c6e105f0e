"""
Per-row drawing instructions.

Derives, for each commit row, what a renderer has to draw: the vertical
segments above and below the dot, the lines of other lineages crossing the
row, and the curves fanning out to merge parents.
"""

from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Sequence, Set

from .lanes import LaneAssignment
from .models import Commit, Edge, GraphNode


def build_nodes(
    commits: Sequence[Commit],
    lanes: LaneAssignment,
    edges: Sequence[Edge],
    branch_heads: Optional[Mapping[str, str]] = None,
) -> List[GraphNode]:
    """
    Build one GraphNode per commit, in input order.

    Args:
        commits: Commits ordered newest first.
        lanes: Column and color assignment for the commits.
        edges: Edge list built from the same assignment.
        branch_heads: Optional SHA -> branch label map.

    Returns:
        List of GraphNode objects, index-aligned with ``commits``.
    """
    if branch_heads is None:
        branch_heads = {}

    outgoing: Dict[int, List[Edge]] = defaultdict(list)
    incoming: Dict[int, List[Edge]] = defaultdict(list)
    crossing: Dict[int, Set[int]] = defaultdict(set)

    for edge in edges:
        outgoing[edge.child_row].append(edge)
        incoming[edge.parent_row].append(edge)
        for row in range(edge.child_row + 1, edge.parent_row):
            crossing[row].add(edge.parent_column)

    nodes: List[GraphNode] = []
    for row, commit in enumerate(commits):
        col = lanes.columns[commit.sha]
        out_edges = outgoing.get(row, [])

        nodes.append(
            GraphNode(
                id=commit.sha,
                commit=commit,
                column=col,
                color=lanes.colors.get(commit.sha, 0),
                branch_label=branch_heads.get(commit.sha),
                line_from_top=any(
                    e.parent_column == col for e in incoming.get(row, [])
                ),
                line_to_bottom=any(
                    e.parent_column == col and e.is_first_parent for e in out_edges
                ),
                pass_through_lanes=frozenset(crossing.get(row, set()) - {col}),
                curves_to_bottom=[
                    e.parent_column for e in out_edges if e.parent_column != col
                ],
            )
        )

    return nodes
