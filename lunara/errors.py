"""
Exception types raised by the Lunara core.

Each failure class carries a ``kind`` so callers (the CLI layer) can map
errors to exit codes and diagnostics without string matching.
"""

from enum import Enum
from typing import Optional


class ConfigErrorKind(Enum):
    """Failure classes for configuration loading."""

    NOT_FOUND = "not_found"
    IO = "io"
    PARSE = "parse"
    INVALID = "invalid"


class RepoErrorKind(Enum):
    """Failure classes for repository inspection."""

    NOT_REPOSITORY = "not_repository"
    OTHER = "other"


class LunaraError(Exception):
    """Base class for all Lunara specific errors."""


class ConfigError(LunaraError):
    """Raised when a configuration cannot be produced."""

    kind: ConfigErrorKind = ConfigErrorKind.IO

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConfigNotFoundError(ConfigError):
    """No configuration file exists in the searched directory."""

    kind = ConfigErrorKind.NOT_FOUND

    def __init__(self, message: str = "no lunara.yml(.yaml) found"):
        super().__init__(message)


class ConfigIOError(ConfigError):
    """The configuration file could not be read."""

    kind = ConfigErrorKind.IO

    def __init__(self, cause: BaseException):
        super().__init__(f"io error: {cause}", cause)


class ConfigParseError(ConfigError):
    """The configuration text does not match the schema."""

    kind = ConfigErrorKind.PARSE

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(f"yaml parse error: {detail}", cause)


class ConfigInvalidError(ConfigError):
    """A parsed configuration violates a cross-field rule."""

    kind = ConfigErrorKind.INVALID

    def __init__(self, reason: str):
        super().__init__(f"invalid config: {reason}")
        self.reason = reason


class RepoError(LunaraError):
    """Raised when repository state cannot be inspected."""

    kind: RepoErrorKind = RepoErrorKind.OTHER


class NotRepositoryError(RepoError):
    """No repository metadata directory was found above the start path."""

    kind = RepoErrorKind.NOT_REPOSITORY

    def __init__(self, message: str = "not a git repository"):
        super().__init__(message)
