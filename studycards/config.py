"""
Configuration management for StudyCards.

This module handles loading and accessing configuration values from config.yaml.
Limits such as the folder depth cap live here so they can be tuned without
changing code.
"""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging


class ConfigManager:
    """
    Manages configuration loading and access for StudyCards.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file, falling back to defaults."""
        if not self.config_path.exists():
            logging.info(f"Configuration file not found: {self.config_path}, using defaults")
            self._config = self._get_default_config()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            self._config = self._get_default_config()
            return

        if not isinstance(loaded, dict):
            logging.error(f"Configuration root must be a mapping: {self.config_path}")
            self._config = self._get_default_config()
            return

        self._config = _merge(self._get_default_config(), loaded)
        logging.info(f"Configuration loaded from {self.config_path}")

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "database": {
                "filename": "studycards.db"
            },
            "paths": {
                "log_file": "studycards.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "folders": {
                "max_depth": 10,
                "max_name_length": 50
            },
            "editor": {
                "min_zoom": 25,
                "max_zoom": 200
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "folders.max_depth")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("folders.max_depth")  # Returns 10
            config.get("logging.level")      # Returns "INFO"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def database_filename(self) -> str:
        """Get database filename."""
        return self.get("database.filename", "studycards.db")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "studycards.log")

    @property
    def max_folder_depth(self) -> int:
        """Get the folder depth cap (root folders are depth 0)."""
        return int(self.get("folders.max_depth", 10))

    @property
    def max_folder_name_length(self) -> int:
        """Get the maximum folder name length."""
        return int(self.get("folders.max_name_length", 50))

    @property
    def min_zoom(self) -> int:
        return int(self.get("editor.min_zoom", 25))

    @property
    def max_zoom(self) -> int:
        return int(self.get("editor.max_zoom", 200))


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``override`` onto ``base``."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
