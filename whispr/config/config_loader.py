"""Configuration loader for Whispr."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import ruamel.yaml
from ruamel.yaml.error import YAMLError

from whispr.config.validators import default_config, validate_config
from whispr.utils.exceptions import ConfigurationError

# The emoji logger reads this module's settings, so the loader reports
# through the plain stdlib logger to avoid a circular import.
_log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WHISPR_CONFIG"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Loads and manages application configuration from a YAML file."""

    def __init__(self, config_path: Optional[str] = None) -> None:
        """Initialize the configuration loader.

        Args:
            config_path: Path to the configuration file. Defaults to the
                ``WHISPR_CONFIG`` environment variable, then ``config.yml``.
        """
        self.config_path = Path(
            config_path or os.environ.get(CONFIG_ENV_VAR, "config.yml")
        )
        self.config: Dict[str, Any] = {}
        self.validated_config = None
        self.validation_error: Optional[str] = None
        self.load()

    def load(self) -> None:
        """Load configuration from the YAML file on top of the defaults."""
        loaded: Dict[str, Any] = {}

        if self.config_path.exists():
            yaml_loader = ruamel.yaml.YAML()
            yaml_loader.preserve_quotes = True
            yaml_loader.width = 4096

            try:
                with open(self.config_path, "r") as f:
                    loaded = yaml_loader.load(f) or {}
            except YAMLError as e:
                raise ConfigurationError(
                    f"Could not parse config file {self.config_path}: {e}"
                ) from e

            if not isinstance(loaded, dict):
                raise ConfigurationError(
                    f"Config file {self.config_path} must contain a mapping"
                )
        else:
            _log.debug("Config file %s not found, using defaults", self.config_path)

        self.config = _deep_merge(default_config(), loaded)

        # Validate configuration
        self._validate_config()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., "audio.lock_timeout").
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., "asr.model").
            value: Value to set.
        """
        keys = key.split(".")
        config_ref = self.config

        # Navigate to the parent of the target key
        for k in keys[:-1]:
            if k not in config_ref:
                config_ref[k] = {}
            config_ref = config_ref[k]

        config_ref[keys[-1]] = value

    def _validate_config(self) -> None:
        """Validate the loaded configuration using Pydantic schemas."""
        try:
            self.validated_config = validate_config(self.config)
            self.validation_error = None
        except ValueError as e:
            # Continue with unvalidated config but log the error
            self.validated_config = None
            self.validation_error = str(e)
            _log.error("%s", e)


# Global config instance
config = ConfigLoader()
