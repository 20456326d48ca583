"""
safelink.utils - Utility module

Common utilities including phone formatting and logging configuration.
"""

from safelink.utils.paths import DEFAULT_CONFIG_DIR, resolve_config_dir
from safelink.utils.phone import format_phone

__all__ = ["format_phone", "resolve_config_dir", "DEFAULT_CONFIG_DIR"]
