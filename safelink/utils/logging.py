"""
Logging setup for the safelink command.

The console only shows warnings and errors unless ``--verbose`` or
SAFELINK_LOG_LEVEL lowers the threshold. Every run also writes full debug
output to a daily file (``~/.safelink/logs/safelink_YYYYMMDD.log`` by
default) so a failed request can be inspected afterwards.

Usage:
    setup_logging(verbose=settings.verbose, log_dir=settings.log_dir)
    cleanup_old_logs(settings.log_dir, keep_count=10)
"""

import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click

from safelink.utils.paths import resolve_config_dir

# Logger every safelink module logs under
ROOT_LOGGER = "safelink"

# Overrides the console threshold, e.g. SAFELINK_LOG_LEVEL=info
LEVEL_ENV_VAR = "SAFELINK_LOG_LEVEL"

DEFAULT_CONSOLE_LEVEL = logging.WARNING

LOG_FILE_PREFIX = "safelink_"

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = (
    "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# click colour per level name
LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}


def default_log_dir() -> Path:
    """Log directory inside the configuration directory."""
    return resolve_config_dir() / "logs"


def log_file_for(log_dir: Path, day: Optional[date] = None) -> Path:
    """Daily log file in log_dir for the given day (default: today)."""
    day = day or date.today()
    return log_dir / f"{LOG_FILE_PREFIX}{day:%Y%m%d}.log"


def console_level(verbose: bool = False) -> int:
    """
    Console threshold for this run.

    ``--verbose`` wins; otherwise SAFELINK_LOG_LEVEL names a level, and an
    unset or unknown name falls back to WARNING.
    """
    if verbose:
        return logging.DEBUG

    name = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else DEFAULT_CONSOLE_LEVEL
    return level if isinstance(level, int) else DEFAULT_CONSOLE_LEVEL


def stderr_supports_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


class LevelColorFormatter(logging.Formatter):
    """Console formatter that colours the level name with click.style."""

    def __init__(self, fmt: str = CONSOLE_FORMAT, color: bool = False):
        super().__init__(fmt, DATE_FORMAT)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        if not self.color or record.levelname not in LEVEL_COLORS:
            return super().format(record)

        # Style a copy; the file handler formats the same record
        styled = logging.makeLogRecord(record.__dict__)
        styled.levelname = click.style(
            record.levelname, fg=LEVEL_COLORS[record.levelname], bold=True
        )
        return super().format(styled)


def setup_logging(
    verbose: bool = False,
    log_dir: Optional[Path] = None,
    file_logging: bool = True,
) -> logging.Logger:
    """
    Configure the safelink logger for one CLI run.

    Args:
        verbose: Show debug output on the console
        log_dir: Directory for daily log files (default: ~/.safelink/logs)
        file_logging: Write the daily debug log file

    Returns:
        The safelink root logger

    Calling it again replaces the handlers of the previous call. A log file
    that cannot be opened only costs the file output, with a warning.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level(verbose))
    console_format = FILE_FORMAT if verbose else CONSOLE_FORMAT
    console.setFormatter(
        LevelColorFormatter(console_format, color=stderr_supports_color())
    )
    logger.addHandler(console)

    if not file_logging:
        return logger

    path = log_file_for(log_dir or default_log_dir())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        logger.warning(f"File logging disabled, cannot open {path}: {e}")
        return logger

    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    logger.addHandler(file_handler)
    logger.debug(f"Logging to {path}")
    return logger


def cleanup_old_logs(log_dir: Optional[Path] = None, keep_count: int = 10) -> int:
    """
    Delete all but the newest keep_count daily log files.

    Args:
        log_dir: Directory holding the log files (default: ~/.safelink/logs)
        keep_count: Files to keep; 0 keeps everything

    Returns:
        Number of files deleted
    """
    if keep_count <= 0:
        return 0

    directory = log_dir or default_log_dir()
    if not directory.is_dir():
        return 0

    # Date-stamped names sort oldest first
    logs = sorted(directory.glob(f"{LOG_FILE_PREFIX}*.log"), reverse=True)

    deleted = 0
    for stale in logs[keep_count:]:
        try:
            stale.unlink()
        except OSError as e:
            logging.getLogger(__name__).debug(f"Could not remove {stale}: {e}")
            continue
        deleted += 1

    return deleted


def get_logger(name: str) -> logging.Logger:
    """Logger for name, placed under the safelink hierarchy."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = [
    "cleanup_old_logs",
    "console_level",
    "default_log_dir",
    "get_logger",
    "log_file_for",
    "setup_logging",
    "LevelColorFormatter",
]
