"""
Column arena for lane allocation.

A table of column slots, each either free (``None``) or owned by the SHA of
the commit currently occupying it. The arena grows as new lineages appear,
slots are freed and reused, and it never shrinks within one computation.
"""

from typing import List, Optional

from .tracer import LayoutTrace


class ColumnArena:
    """
    Resizable table of column slots.

    Column search is always leftmost-first, which keeps the graph as narrow
    as possible and makes layouts reproducible.

    Args:
        trace: Optional trace that receives an event for every allocation,
            occupation and release.
    """

    def __init__(self, trace: Optional[LayoutTrace] = None):
        self.slots: List[Optional[str]] = []
        self.trace = trace
        self.row = 0

    @property
    def width(self) -> int:
        """Number of slots ever created."""
        return len(self.slots)

    def find_free_column(self) -> int:
        """Return the lowest free slot, appending a new one if all are taken."""
        for index, owner in enumerate(self.slots):
            if owner is None:
                self._record("allocate", index)
                return index
        self.slots.append(None)
        index = len(self.slots) - 1
        self._record("allocate", index)
        return index

    def occupy(self, index: int, owner: str) -> None:
        """Mark ``index`` as owned by ``owner``, growing the arena if needed."""
        while len(self.slots) <= index:
            self.slots.append(None)
        previous = self.slots[index]
        self.slots[index] = owner
        self._record("occupy", index, owner, previous)

    def free(self, index: int) -> None:
        """Release ``index``. Out-of-range indices are ignored."""
        if 0 <= index < len(self.slots):
            previous = self.slots[index]
            self.slots[index] = None
            self._record("free", index, previous=previous)

    def owner_of(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.slots):
            return self.slots[index]
        return None

    def live_columns(self) -> List[int]:
        """Indices of slots currently owned."""
        return [i for i, owner in enumerate(self.slots) if owner is not None]

    def snapshot(self) -> List[Optional[str]]:
        return list(self.slots)

    def _record(
        self,
        action: str,
        column: int,
        sha: Optional[str] = None,
        previous: Optional[str] = None,
    ) -> None:
        if self.trace is not None:
            self.trace.add_event(self.row, action, column, sha, previous)
