"""
safelink.config - Configuration management module

Contains configuration loading, validation, and default file generation.
"""

from safelink.config.generator import generate_default_config, save_config_file
from safelink.config.loader import (
    DEFAULT_CONFIG_FILE,
    ConfigError,
    ConfigLoader,
    Settings,
)

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "DEFAULT_CONFIG_FILE",
    "Settings",
    "generate_default_config",
    "save_config_file",
]
