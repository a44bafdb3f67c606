"""
Configuration management for Scriptorium.

This module handles loading and accessing configuration values from config.yaml,
with secrets and the runtime mode taken from environment variables. It provides
a centralized way to manage all settings without changing code.
"""

import copy
import os
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError

DEVELOPMENT_MODE = "development"

# Environment variable -> dot-notation config key
ENV_OVERRIDES = {
    "SCRIPTORIUM_ENV": "runtime.mode",
    "NOTION_ACCESS_TOKEN": "notion.access_token",
    "NOTION_DATA_SOURCE_ID_WRITING": "notion.data_sources.writing",
    "NOTION_DATA_SOURCE_ID_BOOKS": "notion.data_sources.books",
    "NOTION_DATA_SOURCE_ID_ALBUMS": "notion.data_sources.albums",
    "NOTION_DATA_SOURCE_ID_PODCASTS": "notion.data_sources.podcasts",
}


class DataSourceIds(BaseModel):
    """Notion data source ids, one per content collection."""

    writing: str = Field(..., min_length=1)
    books: str = Field(..., min_length=1)
    albums: str = Field(..., min_length=1)
    podcasts: str = Field(..., min_length=1)


class NotionSettings(BaseModel):
    """Validated settings required to talk to Notion."""

    access_token: str = Field(..., min_length=1)
    api_base_url: str = "https://api.notion.com/v1"
    version: str = "2025-09-03"
    timeout: float = 30.0
    page_size: int = Field(100, ge=1, le=100)
    data_sources: DataSourceIds


class ConfigManager:
    """
    Manages configuration loading and access for Scriptorium.
    """

    def __init__(self, config_path: str = "config.yaml", environ: Optional[Dict[str, str]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
            environ: Environment mapping to read overrides from (defaults to os.environ)
        """
        self.config_path = Path(config_path)
        self.environ = os.environ if environ is None else environ
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file, then apply environment overrides."""
        self._config = self._get_default_config()

        if not self.config_path.exists():
            logging.info(f"Configuration file not found: {self.config_path}, using defaults")
        else:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
                self._merge(self._config, loaded)
                logging.info(f"Configuration loaded from {self.config_path}")
            except (OSError, yaml.YAMLError) as e:
                logging.error(f"Failed to load configuration: {e}")
                self._config = self._get_default_config()

        self._apply_env_overrides()

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Recursively merge loaded values over the defaults."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self) -> None:
        for env_var, key_path in ENV_OVERRIDES.items():
            value = self.environ.get(env_var)
            if value:
                self.set(key_path, value)

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return copy.deepcopy({
            "runtime": {
                "mode": "production"
            },
            "notion": {
                "api_base_url": "https://api.notion.com/v1",
                "version": "2025-09-03",
                "timeout": 30.0,
                "page_size": 100,
                "access_token": None,
                "data_sources": {
                    "writing": None,
                    "books": None,
                    "albums": None,
                    "podcasts": None
                }
            },
            "cache": {
                "directory": ".local-cache",
                "namespace": "notion",
                "enabled_modes": [DEVELOPMENT_MODE]
            },
            "retry": {
                "max_attempts": 3,
                "initial_delay_ms": 2000,
                "max_delay_ms": 10000,
                "backoff_multiplier": 2
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        })

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "retry.max_attempts")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("notion.version")  # Returns "2025-09-03"
            config.get("notion.data_sources.writing")
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set a configuration value using dot notation, creating sections as needed."""
        keys = key_path.split('.')
        section = self._config
        for key in keys[:-1]:
            if not isinstance(section.get(key), dict):
                section[key] = {}
            section = section[key]
        section[keys[-1]] = value

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
        """Reload configuration from file and environment."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def runtime_mode(self) -> str:
        """Get the runtime mode ("development", "production", ...)."""
        return self.get("runtime.mode", "production")

    @property
    def is_development(self) -> bool:
        return self.runtime_mode == DEVELOPMENT_MODE

    @property
    def cache_directory(self) -> str:
        return self.get("cache.directory", ".local-cache")

    @property
    def cache_namespace(self) -> str:
        return self.get("cache.namespace", "notion")

    @property
    def cache_enabled(self) -> bool:
        """Whether caching is active in the current runtime mode."""
        enabled_modes: List[str] = self.get("cache.enabled_modes", [DEVELOPMENT_MODE])
        return self.runtime_mode in enabled_modes

    @property
    def retry_settings(self) -> Dict[str, Any]:
        return self.get_section("retry")

    def notion_settings(self) -> NotionSettings:
        """
        Get validated Notion settings.

        Raises:
            ConfigurationError: If the access token or a data source id is missing
        """
        try:
            return NotionSettings.model_validate(self.get_section("notion"))
        except ValidationError as e:
            missing = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise ConfigurationError(f"Invalid Notion configuration: {missing}") from e


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
