"""
Branch tip labels.

Builds the SHA -> label map the layout attaches to rows. When several
branches point at the same commit only one label is shown, so the order in
which candidates are considered decides which one.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List


@dataclass(frozen=True)
class BranchRef:
    """
    A branch pointing at a commit.

    Attributes:
        name: Branch name as displayed (e.g. "main", "origin/feature").
        target_sha: SHA of the commit the branch points to.
        is_remote: Whether this is a remote-tracking branch.
        is_current: Whether this is the checked-out branch.
    """

    name: str
    target_sha: str
    is_remote: bool = False
    is_current: bool = False


def sort_branches(branches: Iterable[BranchRef]) -> List[BranchRef]:
    """Current branch first, then local before remote, then by name."""
    return sorted(branches, key=lambda b: (not b.is_current, b.is_remote, b.name))


def branch_heads(branches: Iterable[BranchRef], sort: bool = True) -> Dict[str, str]:
    """
    Map each tip SHA to a single branch label.

    The first candidate seen for a SHA wins.

    Args:
        branches: Branch candidates.
        sort: Order candidates with sort_branches() first. Pass False to
            keep the caller's order as the tie-break.

    Returns:
        Dictionary of SHA -> branch name
    """
    candidates = sort_branches(branches) if sort else list(branches)
    heads: Dict[str, str] = {}
    for branch in candidates:
        heads.setdefault(branch.target_sha, branch.name)
    return heads
