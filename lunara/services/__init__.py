"""
Service layer for Lunara.

This module contains configuration discovery, loading and validation.
"""

from .config_manager import (
    ConfigurationManager,
    discover,
    dump_config,
    load,
    load_from,
    parse_config,
    validate_config,
)

__all__ = [
    "ConfigurationManager",
    "discover",
    "dump_config",
    "load",
    "load_from",
    "parse_config",
    "validate_config",
]
