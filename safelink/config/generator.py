"""
Configuration file generator for the contacts client.

Provides functionality to generate a default configuration file with
documentation for all available options.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def generate_default_config() -> str:
    """
    Generate default YAML configuration with all options documented.

    Every option is commented out so the file changes nothing until edited.

    Returns:
        String containing YAML configuration with comments
    """
    return """# SafeLink Contacts Configuration
# ===============================
#
# Default options for the safelink command. CLI arguments always override
# these values.
#
# To use this configuration:
#   1. Save as ~/.safelink/config.yaml (or custom location)
#   2. Uncomment and modify options as needed


# Contact Service
# ---------------

# Root URL of the contact service (the API lives under <base_url>/contacts)
# Default: http://localhost:8080
# base_url: http://localhost:8080

# HTTP timeout in seconds for each request
# Default: 30
# request_timeout: 30


# Display
# -------

# Number of contacts per page on the list screen
# Default: 10
# page_size: 10

# How long notifications stay visible, in milliseconds
# Default: 1500
# notification_duration_ms: 1500


# Logging Options
# ---------------

# Enable verbose output with detailed logging
# Default: false
# verbose: false

# Directory for log files
# Default: ~/.safelink/logs
# log_dir: /path/to/logs

# Number of daily log files to keep (0 keeps all)
# Default: 10
# log_retention_count: 10
"""


def save_config_file(
    config_path: Path, overwrite: bool = False
) -> tuple[bool, str | None]:
    """
    Write the default configuration to a file.

    Args:
        config_path: Destination path
        overwrite: Replace an existing file

    Returns:
        Tuple of (success, error message or None)
    """
    config_path = config_path.expanduser()

    if config_path.exists() and not overwrite:
        return (
            False,
            f"Configuration file already exists: {config_path}\n"
            "Use --force to overwrite.",
        )

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_default_config(), encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write configuration file {config_path}: {e}")
        return False, f"Failed to write configuration file: {e}"

    logger.debug(f"Wrote default configuration to {config_path}")
    return True, None
