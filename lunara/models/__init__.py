"""
Data models for Lunara.

This module contains the data classes produced by the core: the validated
pipeline configuration and the repository state summary.
"""

from .config import Config, Gate, Intent, Language, Pipeline, Policies, Timeouts
from .git import BranchKind, BranchRef, RepoInfo, StatusCounts, StatusSummary, Upstream

__all__ = [
    "Config",
    "Pipeline",
    "Language",
    "Gate",
    "Timeouts",
    "Policies",
    "Intent",
    "BranchKind",
    "BranchRef",
    "RepoInfo",
    "Upstream",
    "StatusCounts",
    "StatusSummary",
]
