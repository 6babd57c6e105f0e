"""
Graph module for commit ancestry.

Uses networkx for:
- Graph representation of the in-window child -> parent links
- Cycle detection
- Checking that the input order is reverse-topological
"""

from typing import Dict, List, Sequence, Tuple

import networkx as nx

from .lanes import index_rows
from .models import Commit


class CommitGraph:
    """
    Directed ancestry graph over a loaded commit window.

    Edges point from child to parent and exist only when both ends are in
    the window. Parent order is kept as an ``order`` attribute on each edge.
    """

    def __init__(self, commits: Sequence[Commit]):
        self.rows: Dict[str, int] = index_rows(commits)
        self.graph: nx.DiGraph = nx.DiGraph()
        self.graph.add_nodes_from(self.rows)

        for row, commit in enumerate(commits):
            if self.rows[commit.sha] != row:
                continue
            for order, parent in enumerate(commit.parent_shas):
                if parent in self.rows and not self.graph.has_edge(commit.sha, parent):
                    self.graph.add_edge(commit.sha, parent, order=order)

    def has_cycles(self) -> bool:
        """Check if the ancestry contains a cycle (malformed history)."""
        return not nx.is_directed_acyclic_graph(self.graph)

    def order_violations(self) -> List[Tuple[str, str]]:
        """
        Find (child, parent) links whose parent is not below the child.

        A valid reverse-topological window lists every parent after all of
        its children. Links breaking that cannot be drawn as downward edges.
        """
        violations = [
            (child, parent)
            for child, parent in self.graph.edges()
            if self.rows[parent] <= self.rows[child]
        ]
        return sorted(
            violations, key=lambda pair: (self.rows[pair[0]], self.rows[pair[1]])
        )

    def roots(self) -> List[str]:
        """Commits with no parent inside the window, in row order."""
        return self._by_row(n for n, degree in self.graph.out_degree() if degree == 0)

    def tips(self) -> List[str]:
        """Commits with no child inside the window, in row order."""
        return self._by_row(n for n, degree in self.graph.in_degree() if degree == 0)

    def parents(self, sha: str) -> List[str]:
        """In-window parents of ``sha`` in parent order."""
        if sha not in self.graph:
            return []
        edges = self.graph.out_edges(sha, data="order")
        return [parent for _, parent, _ in sorted(edges, key=lambda e: e[2])]

    def children(self, sha: str) -> List[str]:
        if sha not in self.graph:
            return []
        return self._by_row(self.graph.predecessors(sha))

    def first_parent_chain(self, sha: str) -> List[str]:
        """Follow first-parent links from ``sha`` while they stay in the window."""
        chain: List[str] = []
        seen = set()
        current = sha if sha in self.graph else None
        while current is not None and current not in seen:
            chain.append(current)
            seen.add(current)
            current = None
            for _, parent, order in self.graph.out_edges(chain[-1], data="order"):
                if order == 0:
                    current = parent
                    break
        return chain

    def topological_order(self) -> List[str]:
        """
        Children-before-parents order, ties broken by input row.

        Falls back to input order when the ancestry has cycles.
        """
        try:
            return list(
                nx.lexicographical_topological_sort(self.graph, key=self.rows.get)
            )
        except nx.NetworkXUnfeasible:
            return self._by_row(self.graph.nodes())

    def _by_row(self, shas) -> List[str]:
        return sorted(shas, key=self.rows.get)


def create_graph(commits: Sequence[Commit]) -> CommitGraph:
    """
    Create a CommitGraph from a list of commits.

    Args:
        commits: Commits ordered newest first

    Returns:
        CommitGraph object
    """
    return CommitGraph(commits)
