"""
Unit tests for data model validation and rendering.
"""

import dataclasses
from pathlib import Path

import pytest

from lunara.errors import ConfigErrorKind, ConfigInvalidError
from lunara.models import (
    BranchKind,
    BranchRef,
    Config,
    Gate,
    Intent,
    Language,
    Pipeline,
    RepoInfo,
    StatusCounts,
    StatusSummary,
    Upstream,
)


class TestConfigValidation:
    """Test Config.validate()."""

    def test_valid_config(self, sample_config):
        """Test that a populated config validates."""
        assert sample_config.validate() is True

    def test_empty_languages_raises_error(self):
        """Test that empty languages is rejected and named."""
        config = Config(pipeline=Pipeline(languages=(), gates=(Gate.BUILD,)))

        with pytest.raises(ConfigInvalidError, match="pipeline.languages") as exc_info:
            config.validate()
        assert exc_info.value.kind is ConfigErrorKind.INVALID

    def test_empty_gates_raises_error(self):
        """Test that empty gates is rejected and named."""
        config = Config(pipeline=Pipeline(languages=(Language.JS,), gates=()))

        with pytest.raises(ConfigInvalidError, match="pipeline.gates"):
            config.validate()

    def test_languages_checked_before_gates(self):
        """Test that the first violated rule is reported."""
        config = Config(pipeline=Pipeline(languages=(), gates=()))

        with pytest.raises(ConfigInvalidError, match="languages"):
            config.validate()

    def test_validate_does_not_mutate(self, sample_config):
        """Test that validation leaves the config untouched."""
        before = dataclasses.replace(sample_config)
        sample_config.validate()
        assert sample_config == before

    def test_config_is_immutable(self, sample_config):
        """Test that loaded configs cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_config.version = "2"


class TestConfigDefaults:
    """Test schema defaults on the model."""

    def test_defaults(self):
        """Test version, intent and policies defaults."""
        config = Config(pipeline=Pipeline(languages=(Language.RUST,), gates=(Gate.LINT,)))

        assert config.version == "1"
        assert config.intent == Intent(path=".lunara/intent.json")
        assert config.policies is None
        assert config.pipeline.timeouts is None


class TestConfigToDict:
    """Test conversion to plain data."""

    def test_enum_values_are_lowercase_strings(self, sample_config):
        """Test that enums serialize to their schema spelling."""
        data = sample_config.to_dict()

        assert data["pipeline"]["languages"] == ["rust", "js"]
        assert data["pipeline"]["gates"] == ["build", "test"]

    def test_unset_sections_are_omitted(self):
        """Test that optional sections are left out when unset."""
        config = Config(pipeline=Pipeline(languages=(Language.RUST,), gates=(Gate.BUILD,)))
        data = config.to_dict()

        assert "policies" not in data
        assert "timeouts" not in data["pipeline"]
        assert data["intent"] == {"path": ".lunara/intent.json"}


class TestBranchRef:
    """Test BranchRef construction and rendering."""

    def test_named_display(self):
        """Test that named branches render as the bare name."""
        branch = BranchRef.named("main")

        assert branch.kind is BranchKind.NAMED
        assert not branch.is_detached
        assert str(branch) == "main"

    def test_detached_display(self):
        """Test that detached heads render with a marker."""
        branch = BranchRef.detached("abc1234")

        assert branch.is_detached
        assert str(branch) == "DETACHED@abc1234"

    def test_equality(self):
        """Test value semantics."""
        assert BranchRef.named("main") == BranchRef.named("main")
        assert BranchRef.named("abc1234") != BranchRef.detached("abc1234")

    def test_repo_info_holds_root_and_branch(self):
        """Test RepoInfo construction."""
        info = RepoInfo(root=Path("/work"), branch=BranchRef.named("dev"))

        assert info.root == Path("/work")
        assert str(info.branch) == "dev"


class TestStatusSummary:
    """Test StatusSummary defaults."""

    def test_defaults(self):
        """Test the empty summary."""
        summary = StatusSummary()

        assert summary.upstream == Upstream(name=None, ahead=0, behind=0)
        assert summary.counts == StatusCounts(staged=0, unstaged=0, untracked=0)
        assert summary.has_changes is False

    def test_has_changes(self):
        """Test that any count marks the tree as changed."""
        summary = StatusSummary(counts=StatusCounts(untracked=1))

        assert summary.has_changes is True
