"""
Configuration management for Blockweave.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to manage resolver and rendering settings without
changing code.
"""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Blockweave.
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
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}

            if not isinstance(loaded, dict):
                raise ValueError(f"Configuration root must be a mapping, got {type(loaded).__name__}")

            self._config = loaded
            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, ValueError, yaml.YAMLError) as e:
            logging.warning(f"Using default configuration: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "resolver": {
                "cache_enabled": True,
                "auto_invalidate": True
            },
            "rendering": {
                "max_embed_depth": 1,
                "not_found_markdown": "[Embedded block not found]",
                "not_found_tree": "Referenced block not found (file: {file_id}, block: {block_id})"
            },
            "generation": {
                "separator": "----------",
                "response_description": "Response text or explanation"
            },
            "paths": {
                "log_file": "blockweave.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "rendering.max_embed_depth")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("resolver.cache_enabled")  # Returns True
            config.get("rendering.max_embed_depth")  # Returns 1
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
    def cache_enabled(self) -> bool:
        """Whether the reference resolver memoizes resolutions."""
        return bool(self.get("resolver.cache_enabled", True))

    @property
    def auto_invalidate(self) -> bool:
        """Whether the resolution cache follows the project's updated_at."""
        return bool(self.get("resolver.auto_invalidate", True))

    @property
    def max_embed_depth(self) -> int:
        """How many embed levels are unwrapped before an opaque label is shown."""
        return int(self.get("rendering.max_embed_depth", 1))

    @property
    def not_found_markdown(self) -> str:
        return self.get("rendering.not_found_markdown", "[Embedded block not found]")

    @property
    def not_found_tree(self) -> str:
        return self.get(
            "rendering.not_found_tree",
            "Referenced block not found (file: {file_id}, block: {block_id})"
        )

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "blockweave.log")


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
