"""
Configuration loader module for the contacts client.

Provides YAML-based configuration file loading with support for:
- Loading configuration from default or custom paths
- Graceful handling of missing configuration files
- Basic validation of configuration structure
- Building typed settings that CLI arguments can override
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from safelink.api.contact_api import (
    DEFAULT_BASE_URL,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TIMEOUT,
)
from safelink.notifications import DEFAULT_DURATION_MS
from safelink.utils.paths import resolve_config_dir

# Default configuration file name
DEFAULT_CONFIG_FILE = "config.yaml"

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


@dataclass
class Settings:
    """
    Effective client settings.

    Attributes:
        base_url: Root URL of the contact service
        page_size: Contacts per page on the list screen
        request_timeout: HTTP timeout in seconds
        notification_duration_ms: How long notifications stay visible
        verbose: Enable debug logging
        log_dir: Directory for log files (None for the default)
        log_retention_count: Number of log files to keep (0 keeps all)
    """

    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout: float = DEFAULT_TIMEOUT
    notification_duration_ms: int = DEFAULT_DURATION_MS
    verbose: bool = False
    log_dir: Optional[Path] = None
    log_retention_count: int = 10

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Settings":
        """
        Build settings from a validated configuration dictionary.

        Missing keys keep their defaults; unknown keys are ignored.
        """
        settings = cls()
        for key in (
            "base_url",
            "page_size",
            "request_timeout",
            "notification_duration_ms",
            "verbose",
            "log_retention_count",
        ):
            if key in config:
                setattr(settings, key, config[key])

        if config.get("log_dir"):
            settings.log_dir = Path(config["log_dir"]).expanduser()

        return settings


class ConfigLoader:
    """
    YAML configuration file loader.

    Attributes:
        config_dir: Directory containing the configuration file
        config_file: Name of the configuration file

    Usage:
        loader = ConfigLoader()
        config = loader.load()

        # Load from specific file
        config = loader.load_from_file("/path/to/config.yaml")
    """

    def __init__(
        self, config_dir: Path | None = None, config_file: str = DEFAULT_CONFIG_FILE
    ):
        """
        Initialize the configuration loader.

        Args:
            config_dir: Directory containing the configuration file.
                       Defaults to ~/.safelink/ or $SAFELINK_CONFIG_DIR
            config_file: Name of the configuration file (default: config.yaml)
        """
        self.config_dir = resolve_config_dir(config_dir)
        self.config_file = config_file

    def _get_config_path(self) -> Path:
        return self.config_dir / self.config_file

    def load(self) -> dict[str, Any]:
        """
        Load configuration from the default configuration file.

        Returns:
            Dictionary containing configuration values, or empty dict if the
            file doesn't exist

        Raises:
            ConfigError: If the configuration file exists but cannot be parsed
        """
        return self.load_from_file(self._get_config_path())

    def load_from_file(self, path: Path | str) -> dict[str, Any]:
        """
        Load configuration from a specific file.

        Args:
            path: Path to the configuration file

        Returns:
            Dictionary containing configuration values, or empty dict if the
            file doesn't exist

        Raises:
            ConfigError: If the configuration file exists but cannot be parsed
        """
        path = Path(path)

        if not path.exists():
            logger.debug(f"Configuration file not found: {path}")
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                config = yaml.safe_load(f)

            if config is None:
                logger.debug(f"Configuration file is empty: {path}")
                return {}

            if not isinstance(config, dict):
                raise ConfigError(
                    f"Configuration file must contain a YAML dictionary, "
                    f"got {type(config).__name__}"
                )

            logger.debug(f"Loaded configuration from {path}")
            return config

        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML configuration file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}") from e

    def validate(self, config: dict[str, Any]) -> None:
        """
        Validate configuration structure and values.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ConfigError: If configuration is invalid
        """
        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration must be a dictionary, got {type(config).__name__}"
            )

        valid_keys: dict[str, type[Any] | tuple[type[Any], ...]] = {
            "base_url": str,
            "page_size": int,
            "request_timeout": (int, float),
            "notification_duration_ms": int,
            "verbose": bool,
            "log_dir": str,
            "log_retention_count": int,
        }

        for key, value in config.items():
            if key not in valid_keys:
                logger.debug(f"Ignoring unknown configuration key: {key}")
                continue

            expected_type = valid_keys[key]
            # bool is an int subclass; only "verbose" may be a bool
            if not isinstance(value, expected_type) or (
                isinstance(value, bool) and expected_type is not bool
            ):
                if isinstance(expected_type, tuple):
                    type_name = " or ".join(t.__name__ for t in expected_type)
                else:
                    type_name = expected_type.__name__
                raise ConfigError(
                    f"Invalid type for '{key}': expected {type_name}, "
                    f"got {type(value).__name__}"
                )

        if "base_url" in config and not config["base_url"].startswith(
            ("http://", "https://")
        ):
            raise ConfigError(
                f"base_url must start with http:// or https://, "
                f"got {config['base_url']!r}"
            )

        for key in ("page_size", "notification_duration_ms"):
            if key in config and config[key] < 1:
                raise ConfigError(f"{key} must be >= 1, got {config[key]}")

        if "request_timeout" in config and config["request_timeout"] <= 0:
            raise ConfigError(
                f"request_timeout must be > 0, got {config['request_timeout']}"
            )

        if "log_retention_count" in config and config["log_retention_count"] < 0:
            raise ConfigError(
                f"log_retention_count must be >= 0, "
                f"got {config['log_retention_count']}"
            )

    def load_and_validate(self) -> dict[str, Any]:
        """
        Load configuration and validate it.

        Returns:
            Validated configuration dictionary

        Raises:
            ConfigError: If configuration cannot be loaded or is invalid
        """
        config = self.load()
        if config:
            self.validate(config)
        return config
