"""
User-facing notifications for contact operations.

Notifications are fire-and-forget: callers hand over a message and carry on.
Every notification is also written to the log at the matching level.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import click

# How long a notification stays visible, in milliseconds
DEFAULT_DURATION_MS = 1500

logger = logging.getLogger(__name__)


class NotificationLevel(Enum):
    """Severity of a notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


# Log level used when recording each notification
_LOG_LEVELS = {
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}

# Terminal colour per level
_COLORS = {
    NotificationLevel.INFO: "cyan",
    NotificationLevel.SUCCESS: "green",
    NotificationLevel.WARNING: "yellow",
    NotificationLevel.ERROR: "red",
}


@dataclass(frozen=True)
class Notification:
    """A single message shown to the user."""

    level: NotificationLevel
    message: str
    duration_ms: int = DEFAULT_DURATION_MS


class Notifier:
    """
    Base notification sink.

    Subclasses implement emit(); the level helpers build the Notification
    and never let a display failure reach the caller.

    Usage:
        notifier = ConsoleNotifier()
        notifier.success("Contact saved")
        notifier.error("Could not reach the contact service")
    """

    def __init__(self, duration_ms: int = DEFAULT_DURATION_MS):
        self.duration_ms = duration_ms

    def emit(self, notification: Notification) -> None:
        raise NotImplementedError

    def notify(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level, message, self.duration_ms)
        logger.log(_LOG_LEVELS[level], f"[{level.value}] {message}")

        try:
            self.emit(notification)
        except Exception as e:
            logger.warning(f"Failed to display notification: {e}")

        return notification

    def info(self, message: str) -> Notification:
        return self.notify(NotificationLevel.INFO, message)

    def success(self, message: str) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message)

    def warning(self, message: str) -> Notification:
        return self.notify(NotificationLevel.WARNING, message)

    def error(self, message: str) -> Notification:
        return self.notify(NotificationLevel.ERROR, message)


class MemoryNotifier(Notifier):
    """Notifier that keeps every notification in a list."""

    def __init__(self, duration_ms: int = DEFAULT_DURATION_MS):
        super().__init__(duration_ms)
        self.notifications: list[Notification] = []

    def emit(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None

    def clear(self) -> None:
        self.notifications.clear()


class ConsoleNotifier(Notifier):
    """Notifier that prints coloured messages to the terminal."""

    def emit(self, notification: Notification) -> None:
        err = notification.level in (
            NotificationLevel.WARNING,
            NotificationLevel.ERROR,
        )
        click.echo(
            click.style(notification.message, fg=_COLORS[notification.level]),
            err=err,
        )
