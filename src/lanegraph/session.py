"""
Paged layout sessions.

History is loaded a page at a time. After every page the whole layout is
recomputed from the cumulative commit list and swapped in at once, so
readers never see a half-updated graph.

For callers that compute off their UI thread:

    >>> snapshot = session.snapshot()          # on the UI thread
    >>> result = session.compute(snapshot)     # on a worker
    >>> session.publish(snapshot.generation, result)   # back on the UI thread

publish() drops results computed from a snapshot that has since been
superseded by another load or page.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .layout import CommitGraphLayout, LayoutResult
from .models import Commit, GraphNode

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of a session's input at one generation."""

    generation: int
    commits: Tuple[Commit, ...]
    branch_heads: Tuple[Tuple[str, str], ...]


class GraphSession:
    """
    Accumulates commit pages and publishes recomputed layouts.

    Args:
        page_size: Commits requested per page. A page shorter than this
            means history is exhausted.
        layout: Engine used for recomputation. Defaults to a plain
            CommitGraphLayout.
    """

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        layout: Optional[CommitGraphLayout] = None,
    ):
        if page_size < 1:
            raise ValueError("page_size must be a positive integer")

        self.page_size = page_size
        self.layout = layout if layout is not None else CommitGraphLayout()
        self.has_more = True

        self._lock = threading.Lock()
        self._commits: List[Commit] = []
        self._branch_heads: Dict[str, str] = {}
        self._generation = 0
        self._published: Optional[LayoutResult] = None
        self._published_generation = -1

    @property
    def commits(self) -> List[Commit]:
        with self._lock:
            return list(self._commits)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def next_skip(self) -> int:
        """Offset to request the next page from."""
        return len(self._commits)

    @property
    def nodes(self) -> List[GraphNode]:
        """Nodes of the most recently published layout."""
        published = self._published
        return list(published.nodes) if published is not None else []

    @property
    def result(self) -> Optional[LayoutResult]:
        return self._published

    @property
    def published_generation(self) -> int:
        """Generation of the published layout, -1 before the first publish."""
        return self._published_generation

    def load(
        self,
        commits: Sequence[Commit],
        branch_heads: Optional[Mapping[str, str]] = None,
    ) -> SessionSnapshot:
        """Replace the session's input with a first page."""
        with self._lock:
            self._commits = list(commits)
            self._branch_heads = dict(branch_heads or {})
            self.has_more = len(commits) >= self.page_size
            return self._advance()

    def append_page(self, commits: Sequence[Commit]) -> SessionSnapshot:
        """Add the next page of older commits."""
        with self._lock:
            self._commits.extend(commits)
            self.has_more = len(commits) >= self.page_size
            return self._advance()

    def set_branch_heads(self, branch_heads: Mapping[str, str]) -> SessionSnapshot:
        with self._lock:
            self._branch_heads = dict(branch_heads)
            return self._advance()

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot()

    def compute(self, snapshot: SessionSnapshot) -> LayoutResult:
        """Lay out a snapshot. Safe to call from any thread."""
        return self.layout.layout(list(snapshot.commits), dict(snapshot.branch_heads))

    def publish(self, generation: int, result: LayoutResult) -> bool:
        """
        Publish a computed layout if it is still current.

        Returns:
            True if the result was published, False if it was stale
        """
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Discarding stale layout for generation %d (current %d)",
                    generation,
                    self._generation,
                )
                return False
            self._published = result
            self._published_generation = generation
            return True

    def refresh(self) -> List[GraphNode]:
        """Recompute and publish synchronously, returning the new nodes."""
        snapshot = self.snapshot()
        result = self.compute(snapshot)
        self.publish(snapshot.generation, result)
        return self.nodes

    def _advance(self) -> SessionSnapshot:
        self._generation += 1
        logger.debug(
            "Session at generation %d with %d commits",
            self._generation,
            len(self._commits),
        )
        return self._snapshot()

    def _snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            generation=self._generation,
            commits=tuple(self._commits),
            branch_heads=tuple(self._branch_heads.items()),
        )
