"""
Debug tracing infrastructure for lanegraph.

This module provides data structures for capturing detailed traces of the
layout pipeline. When debug mode is enabled, the layout engine records every
column arena transition and a snapshot of intermediate data after each stage.

This is primarily useful for:
1. Debugging lane assignment (understanding why a commit landed in a column)
2. Verifying occupancy invariants by replaying arena transitions
3. Writing targeted tests (checking specific allocation decisions)

Usage:
    >>> layout = CommitGraphLayout(debug=True)
    >>> result = layout.layout(commits)
    >>> print(result.trace.summary())
    >>> result.trace.dump_to_file("layout_trace.txt")

The trace captures:
- Pipeline stages (indexed, lanes_assigned, edges_built, nodes_built)
- Every arena event with row, column, owner and previous owner
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

ARENA_ACTIONS = ("allocate", "occupy", "free")


@dataclass
class ArenaEvent:
    """
    Record of a single column arena transition.

    Attributes:
        row: Row being processed when the event happened.
        action: One of "allocate", "occupy" or "free".
        column: Column index affected.
        sha: New owner for "occupy" events, otherwise None.
        previous: Owner of the slot before the event.
    """

    row: int
    action: str
    column: int
    sha: Optional[str] = None
    previous: Optional[str] = None

    def __str__(self) -> str:
        if self.action == "occupy":
            if self.previous is None:
                return f"row {self.row}: occupy col {self.column} by {_short(self.sha)}"
            return (
                f"row {self.row}: occupy col {self.column} "
                f"{_short(self.previous)} -> {_short(self.sha)}"
            )
        if self.action == "free":
            return f"row {self.row}: free col {self.column} ({_short(self.previous)})"
        return f"row {self.row}: {self.action} col {self.column}"


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
        arena_snapshot: Optional copy of the arena slots at this point
    """

    name: str
    data: Dict[str, Any]
    arena_snapshot: Optional[List[Optional[str]]] = None

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        if self.arena_snapshot is not None:
            slots = ", ".join(_short(owner) for owner in self.arena_snapshot)
            lines.append(f"  Arena: [{slots}]")
        return "\n".join(lines)


@dataclass
class LayoutTrace:
    """
    Complete trace of a layout run.

    Attributes:
        stages: List of pipeline stages with their data
        events: List of all arena events, in the order they happened
        commit_count: Number of commits in the input
    """

    stages: List[PipelineStage] = field(default_factory=list)
    events: List[ArenaEvent] = field(default_factory=list)
    commit_count: int = 0

    def add_stage(
        self,
        name: str,
        data: Dict[str, Any],
        arena: Optional[Any] = None,
    ) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "lanes_assigned")
            data: Dictionary of relevant data at this stage
            arena: Optional ColumnArena to snapshot
        """
        snapshot = arena.snapshot() if arena is not None else None
        self.stages.append(PipelineStage(name, data.copy(), snapshot))

    def add_event(
        self,
        row: int,
        action: str,
        column: int,
        sha: Optional[str] = None,
        previous: Optional[str] = None,
    ) -> None:
        """Record an arena transition."""
        self.events.append(ArenaEvent(row, action, column, sha, previous))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def events_for_row(self, row: int) -> List[ArenaEvent]:
        return [e for e in self.events if e.row == row]

    def get_events_by_action(self, action: str) -> List[ArenaEvent]:
        return [e for e in self.events if e.action == action]

    def replay(self) -> List[List[Optional[str]]]:
        """
        Rebuild the arena state after each row from the recorded events.

        Returns:
            One list of slot owners per row, index-aligned with the input.
        """
        slots: List[Optional[str]] = []
        states: List[List[Optional[str]]] = []
        by_row: Dict[int, List[ArenaEvent]] = {}
        for event in self.events:
            by_row.setdefault(event.row, []).append(event)

        for row in range(self.commit_count):
            for event in by_row.get(row, []):
                while len(slots) <= event.column:
                    slots.append(None)
                if event.action == "occupy":
                    slots[event.column] = event.sha
                elif event.action == "free":
                    slots[event.column] = None
            states.append(list(slots))

        return states

    def summary(self) -> str:
        """Generate a human-readable summary of the trace."""
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"Commits: {self.commit_count}",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            has_arena = "+" if stage.arena_snapshot is not None else "-"
            lines.append(f"  [{has_arena}] {stage.name}")

        lines.extend(["", f"Total arena events: {len(self.events)}"])
        for action in ARENA_ACTIONS:
            lines.append(f"  {action}: {len(self.get_events_by_action(action))}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Summary followed by every stage and every arena event."""
        lines = [self.summary(), "", "PIPELINE STAGES:", "-" * 40]
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("ARENA EVENTS:")
        lines.append("-" * 40)
        for event in self.events:
            lines.append(str(event))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())


def _short(sha: Optional[str]) -> str:
    return sha[:7] if sha else "-"
