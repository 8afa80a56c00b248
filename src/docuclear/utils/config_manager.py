"""
DocuClear - Configuration Manager

This module provides centralized JSON-based configuration management for
the default processing settings and output options.
"""

import copy
import json
import os
from typing import Any, Final

from docuclear.config import CONFIG_FILE_PATH
from docuclear.constants import DEFAULT_IMAGE_QUALITY, DEFAULT_TARGET_WIDTH
from docuclear.utils.logger import logger

# Default configuration values
DEFAULT_CONFIG: Final[dict[str, Any]] = {
    "version": 1,
    "processor": {
        "threshold": 128,
        "sharpness": 20,
        "brightness": 10,
        "contrast": 20,
        "rotation": 0,
        "margin": 0,
        "mode": "enhanced",
    },
    "output": {
        "target_width": DEFAULT_TARGET_WIDTH,
        "image_quality": DEFAULT_IMAGE_QUALITY,
    },
}


class ConfigManager:
    """Manages application configuration in JSON format.

    Missing keys are filled from DEFAULT_CONFIG on load, so older or
    hand-edited files keep working. Nothing is written until save() is called.
    """

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to the configuration file.
                        Defaults to CONFIG_FILE_PATH.
        """
        self.config_path = config_path or CONFIG_FILE_PATH
        self._config: dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file or create default."""
        self._config = self._get_default_config()
        if not os.path.exists(self.config_path):
            logger.debug(f"No configuration at {self.config_path}, using defaults")
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading config: {e}")
            return

        if not isinstance(loaded, dict):
            logger.error(f"Ignoring config with unexpected top-level type {type(loaded).__name__}")
            return

        self._merge_defaults(loaded, self._config)
        self._config = loaded
        logger.info("Configuration loaded from JSON")

    def _get_default_config(self) -> dict[str, Any]:
        """Get a copy of the default configuration.

        Returns:
            Deep copy of default configuration dictionary.
        """
        return copy.deepcopy(DEFAULT_CONFIG)

    def _merge_defaults(self, config: dict, defaults: dict) -> None:
        """Merge default values into config for missing keys.

        Args:
            config: Current configuration dictionary.
            defaults: Default configuration dictionary.
        """
        for key, value in defaults.items():
            if key not in config:
                config[key] = value
            elif isinstance(value, dict) and isinstance(config.get(key), dict):
                self._merge_defaults(config[key], value)

    def save(self) -> bool:
        """Save configuration to file.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self.config_path)), exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
            logger.debug("Configuration saved to JSON")
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value (e.g., "processor.mode")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value: Any, save_immediately: bool = True) -> None:
        """Set a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value
            value: Value to set
            save_immediately: Whether to save to file immediately
        """
        keys = key_path.split(".")
        config = self._config

        for key in keys[:-1]:
            if not isinstance(config.get(key), dict):
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

        if save_immediately:
            self.save()

    def section(self, name: str) -> dict[str, Any]:
        """Return a copy of one top-level section (empty if missing)."""
        value = self._config.get(name)
        return copy.deepcopy(value) if isinstance(value, dict) else {}
