"""
Tests for the tracer module.

These tests verify the debug tracing infrastructure used to capture
arena transitions and stage snapshots during layout.
"""

from lanegraph.arena import ColumnArena
from lanegraph.tracer import ArenaEvent, LayoutTrace, PipelineStage


class TestArenaEvent:
    """Tests for ArenaEvent dataclass."""

    def test_creation(self):
        """Test basic creation of ArenaEvent."""
        event = ArenaEvent(row=3, action="occupy", column=1, sha="abcdef123456")
        assert event.row == 3
        assert event.action == "occupy"
        assert event.column == 1
        assert event.sha == "abcdef123456"
        assert event.previous is None

    def test_str_occupy_new(self):
        """Occupying a free slot."""
        text = str(ArenaEvent(3, "occupy", 1, "abcdef123456"))
        assert text == "row 3: occupy col 1 by abcdef1"

    def test_str_occupy_handover(self):
        """Occupying a slot owned by the child shows the handover."""
        text = str(ArenaEvent(3, "occupy", 0, "2222222222", "1111111111"))
        assert "1111111 -> 2222222" in text

    def test_str_free(self):
        """Free events name the released owner."""
        assert str(ArenaEvent(5, "free", 2, previous="abcdef1")) == (
            "row 5: free col 2 (abcdef1)"
        )

    def test_str_allocate(self):
        """Allocate events only name the column."""
        assert str(ArenaEvent(0, "allocate", 4)) == "row 0: allocate col 4"


class TestPipelineStage:
    """Tests for PipelineStage dataclass."""

    def test_str_with_arena(self):
        """The arena snapshot is rendered with short owners."""
        stage = PipelineStage("lanes_assigned", {"width": 2}, ["abcdef123", None])
        text = str(stage)
        assert "=== Stage: lanes_assigned ===" in text
        assert "width: 2" in text
        assert "Arena: [abcdef1, -]" in text

    def test_str_truncates_long_values(self):
        """Long values are cut at 100 characters."""
        stage = PipelineStage("indexed", {"shas": "x" * 300})
        assert "..." in str(stage)
        assert "Arena" not in str(stage)


class TestLayoutTrace:
    """Tests for LayoutTrace class."""

    def test_add_stage_copies_data(self):
        """Stage data is copied at recording time."""
        trace = LayoutTrace()
        data = {"edges": 1}
        trace.add_stage("edges_built", data)
        data["edges"] = 99
        assert trace.get_stage("edges_built").data == {"edges": 1}
        assert trace.get_stage("missing") is None

    def test_add_stage_snapshots_arena(self):
        """Passing an arena stores its slots."""
        arena = ColumnArena()
        arena.occupy(1, "a")
        trace = LayoutTrace()
        trace.add_stage("lanes_assigned", {}, arena)
        assert trace.stages[0].arena_snapshot == [None, "a"]

    def test_event_queries(self):
        """Events can be filtered by row and by action."""
        trace = LayoutTrace()
        trace.add_event(0, "allocate", 0)
        trace.add_event(0, "occupy", 0, "a")
        trace.add_event(1, "free", 0, previous="a")
        assert len(trace.events_for_row(0)) == 2
        assert [e.row for e in trace.get_events_by_action("free")] == [1]

    def test_replay(self):
        """Replay rebuilds the arena after each row."""
        trace = LayoutTrace(commit_count=3)
        trace.add_event(0, "allocate", 0)
        trace.add_event(0, "occupy", 0, "a")
        trace.add_event(0, "occupy", 1, "m")
        trace.add_event(1, "occupy", 0, "b")
        trace.add_event(2, "free", 0, previous="b")
        assert trace.replay() == [["a", "m"], ["b", "m"], [None, "m"]]

    def test_replay_rows_without_events(self):
        """Rows with no events repeat the previous state."""
        trace = LayoutTrace(commit_count=2)
        trace.add_event(0, "occupy", 0, "a")
        assert trace.replay() == [["a"], ["a"]]

    def test_summary(self):
        """Summary counts stages and events by action."""
        trace = LayoutTrace(commit_count=1)
        trace.add_stage("indexed", {"commits": 1})
        trace.add_event(0, "allocate", 0)
        trace.add_event(0, "occupy", 0, "a")
        summary = trace.summary()
        assert "LAYOUT TRACE SUMMARY" in summary
        assert "Commits: 1" in summary
        assert "[-] indexed" in summary
        assert "Total arena events: 2" in summary
        assert "occupy: 1" in summary
        assert "free: 0" in summary

    def test_dump_to_file(self, tmp_path):
        """The full dump is written to disk."""
        trace = LayoutTrace(commit_count=1)
        trace.add_event(0, "occupy", 0, "abcdef12")
        path = tmp_path / "trace.txt"
        trace.dump_to_file(str(path))
        content = path.read_text(encoding="utf-8")
        assert "ARENA EVENTS:" in content
        assert "row 0: occupy col 0 by abcdef1" in content
