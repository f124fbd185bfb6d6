"""
Pytest configuration and shared fixtures.

This module provides common fixtures for the Lunara test suite: sample
configuration text, captured porcelain output and on-disk repository
layouts.
"""

from pathlib import Path

import pytest

from lunara.models.config import Config, Gate, Intent, Language, Pipeline, Policies, Timeouts

VALID_CONFIG_YAML = """\
version: "1"
pipeline:
  languages: [rust]
  gates: [build, lint, test]
policies:
  docs_required: false
  protected_branches: ["main"]
intent:
  path: ".lunara/intent.json"
"""

SAMPLE_STATUS = """\
## main...origin/main [ahead 2, behind 1]
 M a
M  b
?? c
"""


@pytest.fixture
def valid_config_yaml() -> str:
    """Minimal valid lunara.yml text."""
    return VALID_CONFIG_YAML


@pytest.fixture
def sample_config() -> Config:
    """Config with every optional section populated."""
    return Config(
        version="1",
        pipeline=Pipeline(
            languages=(Language.RUST, Language.JS),
            gates=(Gate.BUILD, Gate.TEST),
            timeouts=Timeouts(per_step_secs=300, overall_secs=1800),
        ),
        policies=Policies(docs_required=True, protected_branches=("main", "release")),
        intent=Intent(path=".lunara/custom.json"),
    )


@pytest.fixture
def sample_status() -> str:
    """Captured porcelain status with a tracking header."""
    return SAMPLE_STATUS


def make_repo(root: Path, head: str = "ref: refs/heads/main\n") -> Path:
    """Create a minimal .git directory with the given HEAD content."""
    git_dir = root / ".git"
    git_dir.mkdir(parents=True)
    (git_dir / "HEAD").write_text(head, encoding="utf-8")
    return root


@pytest.fixture
def repo_factory():
    """Factory that lays out a .git directory under a given root."""
    return make_repo


@pytest.fixture
def fake_repo(tmp_path: Path) -> Path:
    """Working tree whose HEAD points at main."""
    return make_repo(tmp_path)
