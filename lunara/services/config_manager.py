"""
Configuration management for Lunara.

Loading is split into two phases: parsing turns lunara.yml text into a typed
Config (schema defaults applied, unknown enum values rejected) and validation
checks the rules that span fields. The phases raise distinct error kinds.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import yaml

from ..errors import (
    ConfigIOError,
    ConfigNotFoundError,
    ConfigParseError,
)
from ..models.config import (
    DEFAULT_INTENT_PATH,
    DEFAULT_VERSION,
    Config,
    Gate,
    Intent,
    Language,
    Pipeline,
    Policies,
    Timeouts,
)
from ..utils.logging import get_logger

logger = get_logger("config.manager")

# Checked in this order
CONFIG_FILENAMES = ("lunara.yml", "lunara.yaml")

PathLike = Union[str, Path]
E = TypeVar("E", Language, Gate)


def discover(directory: PathLike) -> Optional[Path]:
    """
    Find the configuration file in a directory.

    Args:
        directory: Directory to look in. Parents are not searched.

    Returns:
        Path of the first candidate that exists, or None.
    """
    base = Path(directory)
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.exists():
            logger.debug("Discovered config file", extra={"path": str(candidate)})
            return candidate
    return None


def parse_config(text: str) -> Config:
    """
    Parse lunara.yml text into a Config without validating it.

    Raises:
        ConfigParseError: On YAML syntax errors, missing required fields,
            wrong field types or unknown enum values.
    """
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(str(e), e) from e

    if not isinstance(raw, dict):
        raise ConfigParseError("configuration root must be a mapping")

    return _parse_config(raw)


def validate_config(config: Config) -> Config:
    """Run cross-field validation and return the config unchanged."""
    config.validate()
    return config


def load_from(path: PathLike) -> Config:
    """
    Read, parse and validate a configuration file.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigParseError: If the content does not match the schema.
        ConfigInvalidError: If the parsed config fails validation.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigIOError(e) from e

    return validate_config(parse_config(text))


def load() -> Config:
    """Discover and load the configuration for the current directory."""
    return ConfigurationManager().load_config()


def dump_config(config: Config) -> str:
    """Serialize a Config back to lunara.yml text."""
    return yaml.safe_dump(config.to_dict(), sort_keys=False, default_flow_style=False)


class ConfigurationManager:
    """Locates and loads lunara.yml, caching the result."""

    def __init__(
        self,
        config_path: Optional[PathLike] = None,
        directory: Optional[PathLike] = None,
    ):
        """
        Initialize the configuration manager.

        Args:
            config_path: Explicit configuration file. Skips discovery when given.
            directory: Directory to discover the file in. Defaults to the
                current working directory at load time.
        """
        self.config_path = Path(config_path) if config_path else None
        self.directory = Path(directory) if directory else None
        self._config: Optional[Config] = None

    def find_config_file(self) -> Path:
        """
        Resolve the configuration file path.

        Raises:
            ConfigNotFoundError: If no candidate file exists.
            ConfigIOError: If the working directory cannot be determined.
        """
        if self.config_path is not None:
            return self.config_path

        directory = self.directory
        if directory is None:
            try:
                directory = Path.cwd()
            except OSError as e:
                raise ConfigIOError(e) from e

        path = discover(directory)
        if path is None:
            raise ConfigNotFoundError()
        return path

    def load_config(self) -> Config:
        """Load configuration from disk, replacing any cached copy."""
        path = self.find_config_file()
        config = load_from(path)
        logger.debug(
            "Loaded configuration",
            extra={"path": str(path), "version": config.version},
        )
        self._config = config
        return config

    def get_config(self) -> Config:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            return self.load_config()
        return self._config


def _parse_config(raw: Dict[str, Any]) -> Config:
    """Convert a raw mapping into a Config, applying schema defaults."""
    version = _optional(raw, "version", DEFAULT_VERSION, _as_str)

    if raw.get("pipeline") is None:
        raise ConfigParseError("missing field `pipeline`")
    pipeline_data = _as_mapping(raw["pipeline"], "pipeline")

    pipeline = Pipeline(
        languages=tuple(
            _as_enum_list(_required(pipeline_data, "languages", "pipeline"), Language, "pipeline.languages")
        ),
        gates=tuple(
            _as_enum_list(_required(pipeline_data, "gates", "pipeline"), Gate, "pipeline.gates")
        ),
        timeouts=_parse_timeouts(pipeline_data.get("timeouts")),
    )

    policies = None
    if raw.get("policies") is not None:
        policies_data = _as_mapping(raw["policies"], "policies")
        policies = Policies(
            docs_required=_optional(policies_data, "docs_required", False, _as_bool, "policies"),
            protected_branches=tuple(
                _optional(policies_data, "protected_branches", [], _as_str_list, "policies")
            ),
        )

    intent = Intent()
    if raw.get("intent") is not None:
        intent_data = _as_mapping(raw["intent"], "intent")
        intent = Intent(
            path=_optional(intent_data, "path", DEFAULT_INTENT_PATH, _as_str, "intent")
        )

    return Config(pipeline=pipeline, version=version, policies=policies, intent=intent)


def _parse_timeouts(value: Any) -> Optional[Timeouts]:
    if value is None:
        return None
    data = _as_mapping(value, "pipeline.timeouts")
    return Timeouts(
        per_step_secs=_optional(data, "per_step_secs", None, _as_secs, "pipeline.timeouts"),
        overall_secs=_optional(data, "overall_secs", None, _as_secs, "pipeline.timeouts"),
    )


def _field_name(key: str, section: Optional[str]) -> str:
    return f"{section}.{key}" if section else key


def _required(data: Dict[str, Any], key: str, section: str) -> Any:
    if key not in data:
        raise ConfigParseError(f"missing field `{_field_name(key, section)}`")
    return data[key]


def _optional(data: Dict[str, Any], key: str, default: Any, convert, section: Optional[str] = None) -> Any:
    """Convert data[key], or return default when the key is absent or null."""
    value = data.get(key)
    if value is None:
        return default
    return convert(value, _field_name(key, section))


def _as_mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigParseError(f"{where}: expected a mapping, got {type(value).__name__}")
    return value


def _as_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigParseError(f"{where}: expected a string, got {type(value).__name__}")
    return value


def _as_bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigParseError(f"{where}: expected a boolean, got {type(value).__name__}")
    return value


def _as_secs(value: Any, where: str) -> int:
    # bool is an int subclass in Python; `true` is not a duration
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigParseError(f"{where}: expected an integer, got {type(value).__name__}")
    if value < 0:
        raise ConfigParseError(f"{where}: expected a non-negative integer, got {value}")
    return value


def _as_list(value: Any, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise ConfigParseError(f"{where}: expected a sequence, got {type(value).__name__}")
    return value


def _as_str_list(value: Any, where: str) -> List[str]:
    return [_as_str(item, f"{where}[{index}]") for index, item in enumerate(_as_list(value, where))]


def _as_enum_list(value: Any, enum_cls: Type[E], where: str) -> List[E]:
    """Map each item onto enum_cls by exact, case-sensitive value."""
    allowed = [member.value for member in enum_cls]
    members = []
    for item in _as_list(value, where):
        if not isinstance(item, str) or item not in allowed:
            raise ConfigParseError(
                f"{where}: unknown variant `{item}`, expected one of {allowed}"
            )
        members.append(enum_cls(item))
    return members


__all__ = [
    "CONFIG_FILENAMES",
    "ConfigurationManager",
    "discover",
    "dump_config",
    "load",
    "load_from",
    "parse_config",
    "validate_config",
]
