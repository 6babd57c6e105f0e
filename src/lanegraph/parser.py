"""
Parser module for git log output.

Handles parsing of ``git log`` text into Commit objects. Running git is the
caller's business; this module only reads its output.

Two formats are supported:
- NUL-separated records produced with LOG_FORMAT, carrying the metadata
  a client shows next to the graph
- Plain "<sha> <parent> <parent>..." lines as produced by
  ``git log --format='%H %P'``
"""

import re
from datetime import datetime
from typing import List, Optional

from .models import Commit

# sha, parents, author name, author email, author date,
# committer name, committer email, committer date, subject
LOG_FORMAT = "%H%x00%P%x00%an%x00%ae%x00%ai%x00%cn%x00%ce%x00%ci%x00%s%x01"

FIELD_SEPARATOR = "\x00"
RECORD_SEPARATOR = "\x01"
RECORD_FIELDS = 9

SHA_PATTERN = re.compile(r"^[0-9a-fA-F]{40}$")
ABBREV_SHA_PATTERN = re.compile(r"^[0-9a-fA-F]{4,64}$")

# git's %ai / %ci format: 2024-01-02 03:04:05 +0100
GIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


class ParseError(Exception):
    """Raised when input parsing fails."""

    pass


class LogParser:
    """Parses git log output into commits, newest first as given."""

    def parse_records(self, output: str) -> List[Commit]:
        """
        Parse NUL-separated log records.

        Records with fewer than nine fields or without a full 40-character
        SHA are skipped; git occasionally interleaves other output and a
        partial record is not worth failing the whole page for.

        Args:
            output: Raw stdout of ``git log --format=LOG_FORMAT``

        Returns:
            List of Commit objects in output order
        """
        commits: List[Commit] = []

        for record in output.split(RECORD_SEPARATOR):
            trimmed = record.strip()
            if not trimmed:
                continue

            fields = trimmed.split(FIELD_SEPARATOR)
            if len(fields) < RECORD_FIELDS:
                continue

            sha = fields[0].strip()
            if not SHA_PATTERN.match(sha):
                continue

            commits.append(
                Commit(
                    sha=sha,
                    parent_shas=fields[1].split(),
                    author=fields[2],
                    author_email=fields[3],
                    author_date=parse_git_date(fields[4]),
                    committer=fields[5],
                    committer_email=fields[6],
                    committer_date=parse_git_date(fields[7]),
                    message=fields[8],
                )
            )

        return commits

    def parse_parent_lines(self, output: str) -> List[Commit]:
        """
        Parse "<sha> <parents...>" lines.

        Args:
            output: Multi-line string, one commit per line

        Returns:
            List of Commit objects in line order

        Raises:
            ParseError: If a line holds something other than hex identifiers
        """
        commits: List[Commit] = []

        for line_num, line in enumerate(output.strip().split("\n"), 1):
            stripped = line.strip()

            # Skip empty lines and comments
            if not stripped or stripped.startswith("#"):
                continue

            ids = stripped.split()
            for value in ids:
                if not ABBREV_SHA_PATTERN.match(value):
                    raise ParseError(
                        f"Line {line_num}: Invalid commit identifier '{value}': "
                        f"{stripped}"
                    )

            commits.append(Commit(sha=ids[0], parent_shas=ids[1:]))

        return commits


def parse_git_date(value: str) -> Optional[datetime]:
    """Parse a git ISO-like date, returning None when it does not parse."""
    try:
        return datetime.strptime(value.strip(), GIT_DATE_FORMAT)
    except ValueError:
        return None


def parse_log(output: str) -> List[Commit]:
    """
    Convenience function to parse log output in either format.

    Output containing the record separator is read as LOG_FORMAT records,
    anything else as parent lines.

    Args:
        output: Raw git log output

    Returns:
        List of Commit objects
    """
    parser = LogParser()
    if RECORD_SEPARATOR in output:
        return parser.parse_records(output)
    return parser.parse_parent_lines(output)
