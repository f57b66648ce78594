"""
Configuration management for cmdmux.

Provides a configuration file at ~/.cmdmux/config.json for default settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


# Default values - single source of truth
DEFAULTS = {
    "prompt": "> ",
    "delimiter": " ",
    "suffix_collisions": True,
    "collision_suffix": "_bis",
    "exit_commands": ["quit", "exit"],
    "simple": False,
    "log_file": None,
    "history_file": str(Path.home() / ".cmdmux" / "history"),
}


class Config(BaseModel):
    """Configuration settings for cmdmux.

    All settings are optional. Use DEFAULTS for default values.
    """

    model_config = {"extra": "ignore"}  # Ignore unknown fields like _comment

    # Loop settings
    prompt: Optional[str] = Field(
        default=None,
        description="Prompt printed before each line is read"
    )
    delimiter: Optional[str] = Field(
        default=None,
        description="Single character separating the command and its arguments"
    )
    exit_commands: Optional[list[str]] = Field(
        default=None,
        description="Names that end the loop when not registered as commands"
    )
    simple: Optional[bool] = Field(
        default=None,
        description="Use simple loop (no prompt_toolkit)"
    )
    history_file: Optional[str] = Field(
        default=None,
        description="History file for the prompt_toolkit loop"
    )

    # Merge settings
    suffix_collisions: Optional[bool] = Field(
        default=None,
        description="Keep colliding commands from later modules under a suffixed name"
    )
    collision_suffix: Optional[str] = Field(
        default=None,
        description="Suffix appended to colliding command names"
    )

    # Logging
    log_file: Optional[str] = Field(
        default=None,
        description="Write debug log to this file"
    )

    @field_validator("delimiter")
    @classmethod
    def _single_char(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) != 1:
            raise ValueError("delimiter must be a single character")
        return value

    @field_validator("collision_suffix")
    @classmethod
    def _non_empty_suffix(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value:
            raise ValueError("collision_suffix must not be empty")
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback to DEFAULTS, then to provided default."""
        value = getattr(self, key, None)
        if value is not None:
            return value
        return DEFAULTS.get(key, default)


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_DIR = Path.home() / ".cmdmux"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self):
        self._config: Optional[Config] = None

    def _ensure_dir(self) -> None:
        """Ensure config directory exists."""
        self.CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)

    @property
    def config(self) -> Config:
        """Get the current config, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self, create_if_missing: bool = False) -> Config:
        """Load configuration from file.

        Args:
            create_if_missing: If True, create default config file if it doesn't exist.

        Returns:
            Config object with loaded settings, or defaults if file doesn't exist.
        """
        if not self.CONFIG_FILE.exists():
            if create_if_missing:
                self._create_default_config()
            return Config()

        try:
            data = json.loads(self.CONFIG_FILE.read_text())
            return Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Invalid config file {self.CONFIG_FILE}: {e}")
            print(f"Warning: Invalid config file ({e}), using defaults")
            return Config()

    def _create_default_config(self) -> None:
        """Create default config file with actual default values."""
        self._ensure_dir()
        default_config = {"_comment": "cmdmux configuration file", **DEFAULTS}
        self.CONFIG_FILE.write_text(json.dumps(default_config, indent=2) + "\n")

    def _read_raw(self) -> dict[str, Any]:
        if not self.CONFIG_FILE.exists():
            return {}
        try:
            return json.loads(self.CONFIG_FILE.read_text())
        except json.JSONDecodeError:
            return {}

    def save(self, config: Optional[Config] = None) -> Path:
        """Save configuration to file, preserving existing structure.

        Args:
            config: Config to save. If None, saves current config.

        Returns:
            Path to saved config file.
        """
        self._ensure_dir()
        if config is not None:
            self._config = config
        if self._config is None:
            self._config = Config()

        existing_data = self._read_raw()
        # Update only non-None config values, preserving everything else
        for key, value in self._config.model_dump().items():
            if value is not None:
                existing_data[key] = value

        self.CONFIG_FILE.write_text(json.dumps(existing_data, indent=2) + "\n")
        return self.CONFIG_FILE

    def set(self, key: str, value: Any) -> None:
        """Set a config value and save.

        Raises:
            ValueError: Unknown key or value rejected by validation.
        """
        self._config = self.load()

        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")

        data = self._config.model_dump()
        data[key] = value
        self._config = Config.model_validate(data)
        self.save()

    def unset(self, key: str) -> None:
        """Remove a config value (reset to default)."""
        self._config = self.load()

        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")

        setattr(self._config, key, None)

        existing_data = self._read_raw()
        if key in existing_data:
            existing_data[key] = None
        self._ensure_dir()
        self.CONFIG_FILE.write_text(json.dumps(existing_data, indent=2) + "\n")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback."""
        return self.config.get(key, default)

    def list_settings(self) -> dict[str, Any]:
        """List user-customized settings (values that differ from defaults)."""
        result = {}
        for k, v in self.config.model_dump().items():
            if v is None:
                continue
            if k not in DEFAULTS or v != DEFAULTS[k]:
                result[k] = v
        return result

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._config = Config()
        if self.CONFIG_FILE.exists():
            self.CONFIG_FILE.unlink()


# Singleton instance
_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the singleton ConfigManager instance."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager
