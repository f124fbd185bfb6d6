"""
Lunara core

Configuration and repository state layer for the Lunara CI gate: loads and
validates lunara.yml and summarizes the working repository's git state.
"""

__version__ = "0.1.0"
__author__ = "Lunara Team"


def banner() -> str:
    """One-line readiness banner shown by the CLI."""
    return f"Lunara core ready (v{__version__})"
