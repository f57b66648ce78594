"""Configuration management for cmdmux."""

from cmdmux.config.config import (
    DEFAULTS,
    Config,
    ConfigManager,
    get_config_manager,
)

__all__ = [
    "DEFAULTS",
    "Config",
    "ConfigManager",
    "get_config_manager",
]
