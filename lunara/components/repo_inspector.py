"""
Repository inspection for Lunara.

This module provides the RepoInspector class, which locates the enclosing
git repository, resolves the current branch from HEAD and summarizes the
working tree through the git CLI. Nothing here writes to the repository.
"""

import subprocess
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..errors import NotRepositoryError, RepoError
from ..models.git import BranchRef, RepoInfo, StatusSummary, Upstream
from ..utils.logging import get_logger
from .status_parser import parse_ahead_behind, parse_status

logger = get_logger("repo.inspector")

GIT_DIR_NAME = ".git"
HEADS_PREFIX = "refs/heads/"
SYMREF_PREFIX = "ref: "
GITDIR_PREFIX = "gitdir:"
SHORT_SHA_LENGTH = 7

STATUS_COMMAND = ["status", "--porcelain=v1", "--branch"]
AHEAD_BEHIND_COMMAND = ["rev-list", "--left-right", "--count", "HEAD...@{upstream}"]

PathLike = Union[str, Path]


def find_repo_root(start: PathLike) -> Tuple[Path, Path]:
    """
    Walk from start up to the filesystem root looking for repository metadata.

    Args:
        start: Directory to begin the search in

    Returns:
        Tuple of (working tree root, metadata directory)

    Raises:
        NotRepositoryError: If no ancestor holds a .git entry.
    """
    start_path = Path(start).absolute()
    for directory in (start_path, *start_path.parents):
        candidate = directory / GIT_DIR_NAME
        if candidate.is_dir():
            return directory, candidate
        if candidate.is_file():
            git_dir = _read_gitdir_pointer(candidate)
            if git_dir is not None:
                return directory, git_dir
    raise NotRepositoryError()


def _read_gitdir_pointer(git_file: Path) -> Optional[Path]:
    """Follow a ``gitdir: <path>`` file as used by worktrees and submodules."""
    try:
        content = git_file.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    if not content.startswith(GITDIR_PREFIX):
        return None

    target = Path(content[len(GITDIR_PREFIX):].strip())
    if not target.is_absolute():
        target = git_file.parent / target
    return target if target.is_dir() else None


def branch_from_head(content: str) -> BranchRef:
    """
    Interpret the content of a HEAD file.

    ``ref: refs/heads/main`` names a branch; anything else is taken to be a
    commit id and abbreviated.
    """
    head = content.strip()
    if head.startswith(SYMREF_PREFIX):
        ref = head[len(SYMREF_PREFIX):].strip()
        if ref.startswith(HEADS_PREFIX):
            ref = ref[len(HEADS_PREFIX):]
        return BranchRef.named(ref)
    return BranchRef.detached(head[:SHORT_SHA_LENGTH])


def resolve_head(git_dir: PathLike) -> BranchRef:
    """Read HEAD from a metadata directory and resolve the current branch."""
    try:
        content = (Path(git_dir) / "HEAD").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RepoError(f"read HEAD: {e}") from e
    return branch_from_head(content)


class RepoInspector:
    """
    Read-only view of a git working tree.

    Each call spawns at most the git processes it needs and waits for them;
    there is no caching between calls.
    """

    def __init__(self, repo_path: Optional[PathLike] = None):
        """
        Initialize RepoInspector.

        Args:
            repo_path: Working tree root. Defaults to current directory.
        """
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()

    def _run_git_command(self, command: List[str]) -> str:
        """
        Run a git command in the repository and return its stdout.

        Raises:
            RepoError: If git cannot be spawned or exits non-zero.
        """
        full_command = ["git"] + command
        logger.debug(
            "Running git command",
            extra={"command": " ".join(full_command), "cwd": str(self.repo_path)},
        )

        try:
            result = subprocess.run(
                full_command,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise RepoError(f"failed to run {' '.join(full_command)}: {e}") from e

        if result.returncode != 0:
            raise RepoError(
                f"{' '.join(full_command)} failed: {result.stderr.strip()}"
            )

        return result.stdout

    def repo_info(self) -> RepoInfo:
        """Locate the repository enclosing repo_path and resolve its branch."""
        root, git_dir = find_repo_root(self.repo_path)
        return RepoInfo(root=root, branch=resolve_head(git_dir))

    def ahead_behind(self) -> Tuple[int, int]:
        """Count commits ahead of and behind the configured upstream."""
        return parse_ahead_behind(self._run_git_command(AHEAD_BEHIND_COMMAND))

    def status_summary(self) -> StatusSummary:
        """
        Summarize the working tree status.

        Ahead/behind counts from the status header are replaced by an exact
        rev-list count when an upstream is configured and the count succeeds.
        """
        summary = parse_status(self._run_git_command(STATUS_COMMAND))
        upstream = summary.upstream
        if upstream.name is None:
            return summary

        try:
            ahead, behind = self.ahead_behind()
        except RepoError as e:
            logger.debug(
                "Keeping header ahead/behind counts",
                extra={"upstream": upstream.name, "reason": str(e)},
            )
            return summary

        return StatusSummary(
            upstream=Upstream(name=upstream.name, ahead=ahead, behind=behind),
            counts=summary.counts,
        )


def repo_info(start: Optional[PathLike] = None) -> RepoInfo:
    """Locate the repository enclosing start (default: current directory)."""
    if start is None:
        try:
            start = Path.cwd()
        except OSError as e:
            raise RepoError(f"current directory: {e}") from e
    return RepoInspector(start).repo_info()


def status_summary(repo_root: PathLike) -> StatusSummary:
    """Summarize the status of the working tree at repo_root."""
    return RepoInspector(repo_root).status_summary()


def ahead_behind(repo_root: PathLike) -> Tuple[int, int]:
    """Count commits ahead of and behind the upstream of repo_root's branch."""
    return RepoInspector(repo_root).ahead_behind()
