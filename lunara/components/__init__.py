"""
Core components for Lunara.

This module contains the repository inspector and the porcelain status
parser it feeds.
"""

from .repo_inspector import RepoInspector, ahead_behind, repo_info, status_summary
from .status_parser import parse_ahead_behind, parse_status, parse_tracking_header

__all__ = [
    "RepoInspector",
    "repo_info",
    "status_summary",
    "ahead_behind",
    "parse_status",
    "parse_tracking_header",
    "parse_ahead_behind",
]
