"""
Parser for ``git status --porcelain --branch`` output.

The parser is total: lines it cannot interpret are skipped, and numbers it
cannot read count as zero. Porcelain output is produced by whatever git
version is installed, so its exact shape is not something callers control.
"""

from typing import Optional, Tuple

from ..models.git import StatusCounts, StatusSummary, Upstream

HEADER_MARKER = "##"
UNTRACKED_MARKER = "??"
UPSTREAM_SEPARATOR = "..."


def _parse_count(token: str) -> int:
    try:
        return max(int(token), 0)
    except ValueError:
        return 0


def parse_tracking_header(line: str) -> Upstream:
    """
    Parse a branch header such as ``## main...origin/main [ahead 2, behind 1]``.

    Returns:
        Upstream with name set only when the header names a tracking branch.
    """
    spec = line[len(HEADER_MARKER):].strip()
    ahead = behind = 0

    if " [" in spec:
        spec, _, bracket = spec.partition(" [")
        bracket = bracket.rstrip().rstrip("]")
        for token in bracket.split(","):
            label, _, number = token.strip().partition(" ")
            if label == "ahead":
                ahead = _parse_count(number.strip())
            elif label == "behind":
                behind = _parse_count(number.strip())

    name: Optional[str] = None
    if UPSTREAM_SEPARATOR in spec:
        name = spec.split(UPSTREAM_SEPARATOR, 1)[1].strip() or None

    return Upstream(name=name, ahead=ahead, behind=behind)


def parse_status(text: str) -> StatusSummary:
    """
    Summarize porcelain status text.

    Args:
        text: Raw stdout of the status command

    Returns:
        StatusSummary with upstream info from the first header line and
        counts from every file line
    """
    upstream = Upstream()
    header_seen = False
    staged = unstaged = untracked = 0

    for line in text.splitlines():
        if line.startswith(HEADER_MARKER):
            if not header_seen:
                upstream = parse_tracking_header(line)
                header_seen = True
            continue

        if line.startswith(UNTRACKED_MARKER):
            untracked += 1
            continue

        if len(line) < 3:
            continue

        # XY <path>: X is the index column, Y the working tree column
        if line[0] != " ":
            staged += 1
        if line[1] != " ":
            unstaged += 1

    return StatusSummary(
        upstream=upstream,
        counts=StatusCounts(staged=staged, unstaged=unstaged, untracked=untracked),
    )


def parse_ahead_behind(text: str) -> Tuple[int, int]:
    """
    Parse ``git rev-list --left-right --count`` output (``<ahead>\\t<behind>``).

    Missing or unreadable numbers count as zero.
    """
    lines = text.strip().splitlines()
    fields = lines[0].split() if lines else []
    ahead = _parse_count(fields[0]) if len(fields) > 0 else 0
    behind = _parse_count(fields[1]) if len(fields) > 1 else 0
    return ahead, behind
