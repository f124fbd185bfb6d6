"""
Configuration models for lunara.yml.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..errors import ConfigInvalidError

DEFAULT_VERSION = "1"
DEFAULT_INTENT_PATH = ".lunara/intent.json"


class Language(Enum):
    """Languages a pipeline can target."""

    RUST = "rust"
    JS = "js"


class Gate(Enum):
    """Check categories a pipeline run must satisfy."""

    BUILD = "build"
    LINT = "lint"
    TEST = "test"


@dataclass(frozen=True)
class Timeouts:
    """Optional time limits for a pipeline run, in seconds."""

    per_step_secs: Optional[int] = None
    overall_secs: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "per_step_secs": self.per_step_secs,
            "overall_secs": self.overall_secs,
        }


@dataclass(frozen=True)
class Pipeline:
    """Languages and gates a run covers."""

    languages: Tuple[Language, ...]
    gates: Tuple[Gate, ...]
    timeouts: Optional[Timeouts] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "languages": [language.value for language in self.languages],
            "gates": [gate.value for gate in self.gates],
        }
        if self.timeouts is not None:
            data["timeouts"] = self.timeouts.to_dict()
        return data


@dataclass(frozen=True)
class Policies:
    """Repository policies enforced around a run."""

    docs_required: bool = False
    protected_branches: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "docs_required": self.docs_required,
            "protected_branches": list(self.protected_branches),
        }


@dataclass(frozen=True)
class Intent:
    """Location of the intent file a run records against."""

    path: str = DEFAULT_INTENT_PATH

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path}


@dataclass(frozen=True)
class Config:
    """Root configuration loaded from lunara.yml."""

    pipeline: Pipeline
    version: str = DEFAULT_VERSION
    policies: Optional[Policies] = None
    intent: Intent = field(default_factory=Intent)

    def validate(self) -> bool:
        """
        Check the rules the schema cannot express.

        Raises:
            ConfigInvalidError: If languages or gates is empty.
        """
        if not self.pipeline.languages:
            raise ConfigInvalidError("pipeline.languages must not be empty")

        if not self.pipeline.gates:
            raise ConfigInvalidError("pipeline.gates must not be empty")

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping suitable for YAML serialization."""
        data: Dict[str, Any] = {
            "version": self.version,
            "pipeline": self.pipeline.to_dict(),
        }
        if self.policies is not None:
            data["policies"] = self.policies.to_dict()
        data["intent"] = self.intent.to_dict()
        return data
