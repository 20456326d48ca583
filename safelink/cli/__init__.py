"""CLI package for safelink."""

from safelink.cli.formatters import (
    format_pagination,
    show_contact_detail,
    show_contact_list,
)
from safelink.cli.main import (
    DEFAULT_CONFIG_FILE,
    build_app,
    cli,
    get_config_dir,
)
from safelink.utils import DEFAULT_CONFIG_DIR

__all__ = [
    "DEFAULT_CONFIG_DIR",
    "DEFAULT_CONFIG_FILE",
    "build_app",
    "cli",
    "format_pagination",
    "get_config_dir",
    "show_contact_detail",
    "show_contact_list",
]
