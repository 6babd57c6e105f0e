"""Pytest configuration and shared fixtures for lanegraph tests."""

import pytest

from lanegraph import Commit, CommitGraphLayout


def make_commits(pairs):
    """Build commits from (sha, [parents]) pairs."""
    return [Commit(sha=sha, parent_shas=list(parents)) for sha, parents in pairs]


@pytest.fixture
def commits_from():
    """Factory building commits from (sha, [parents]) pairs."""
    return make_commits


@pytest.fixture
def linear_commits():
    """Linear chain C3 -> C2 -> C1."""
    return make_commits([
        ("C3", ["C2"]),
        ("C2", ["C1"]),
        ("C1", []),
    ])


@pytest.fixture
def merge_commits():
    """Merge M of A (first parent) and B, both continuing independently."""
    return make_commits([
        ("M", ["A", "B"]),
        ("A", ["A0"]),
        ("B", ["B0"]),
        ("A0", ["R"]),
        ("B0", ["R"]),
        ("R", []),
    ])


@pytest.fixture
def reuse_commits():
    """B ends as a root at row 2; branch tip D shows up five rows later."""
    return make_commits([
        ("M", ["A", "B"]),
        ("A", ["A2"]),
        ("B", []),
        ("A2", ["A3"]),
        ("A3", ["A4"]),
        ("A4", ["A5"]),
        ("A5", ["A6"]),
        ("D", ["A6"]),
        ("A6", []),
    ])


@pytest.fixture
def feature_branch_commits():
    """
    A feature branch merged back into main, plus an unmerged tip.

        T         (unmerged tip on top of F2)
        M         merge of main M0 and feature F2
        F2
        M0
        F1
        B         branch point
    """
    return make_commits([
        ("T", ["F2"]),
        ("M", ["M0", "F2"]),
        ("F2", ["F1"]),
        ("M0", ["B"]),
        ("F1", ["B"]),
        ("B", []),
    ])


@pytest.fixture
def layout_engine():
    """Default CommitGraphLayout instance."""
    return CommitGraphLayout()


@pytest.fixture
def debug_engine():
    """CommitGraphLayout recording a trace."""
    return CommitGraphLayout(debug=True)
