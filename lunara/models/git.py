"""
Repository state models.

This module defines the data models produced by repository inspection:
the resolved branch, the repository location and the porcelain status
summary.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class BranchKind(Enum):
    """Whether HEAD points at a branch or directly at a commit."""

    NAMED = "named"
    DETACHED = "detached"


@dataclass(frozen=True)
class BranchRef:
    """Current checkout: a branch name or an abbreviated commit id."""

    kind: BranchKind
    value: str

    @classmethod
    def named(cls, name: str) -> "BranchRef":
        return cls(BranchKind.NAMED, name)

    @classmethod
    def detached(cls, short_sha: str) -> "BranchRef":
        return cls(BranchKind.DETACHED, short_sha)

    @property
    def is_detached(self) -> bool:
        return self.kind is BranchKind.DETACHED

    def __str__(self) -> str:
        if self.is_detached:
            return f"DETACHED@{self.value}"
        return self.value


@dataclass(frozen=True)
class RepoInfo:
    """Location of the working tree and its current branch."""

    root: Path
    branch: BranchRef


@dataclass(frozen=True)
class Upstream:
    """Tracking branch and divergence from it."""

    name: Optional[str] = None
    ahead: int = 0
    behind: int = 0


@dataclass(frozen=True)
class StatusCounts:
    """
    Per-file change counts.

    A file modified in both the index and the working tree counts toward
    both staged and unstaged; untracked files count toward neither.
    """

    staged: int = 0
    unstaged: int = 0
    untracked: int = 0


@dataclass(frozen=True)
class StatusSummary:
    """Upstream tracking info plus change counts for a working tree."""

    upstream: Upstream = field(default_factory=Upstream)
    counts: StatusCounts = field(default_factory=StatusCounts)

    @property
    def has_changes(self) -> bool:
        return bool(self.counts.staged or self.counts.unstaged or self.counts.untracked)
