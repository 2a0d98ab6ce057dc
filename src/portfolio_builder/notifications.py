"""User-facing notification channel (browser toasts)."""

from __future__ import annotations

import logging
from collections import deque
from enum import StrEnum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_MAX_PENDING = 50


class Severity(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


_LOG_LEVELS = {
    Severity.SUCCESS: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class Notification(BaseModel):
    message: str
    severity: Severity = Severity.SUCCESS


@runtime_checkable
class Notifier(Protocol):
    """Protocol for fire-and-forget user notifications."""

    def notify(self, message: str, severity: Severity = Severity.SUCCESS) -> None:
        """Report a message to the user."""
        ...


class NotificationChannel:
    """Queue notifications until the web layer hands them to the browser.

    Only the most recent notifications are kept if nobody drains the queue.
    """

    def __init__(self, *, max_pending: int = _MAX_PENDING) -> None:
        self._pending: deque[Notification] = deque(maxlen=max_pending)

    def notify(self, message: str, severity: Severity = Severity.SUCCESS) -> None:
        severity = Severity(severity)
        logger.log(_LOG_LEVELS[severity], "Notification (%s): %s", severity.value, message)
        self._pending.append(Notification(message=message, severity=severity))

    def drain(self) -> list[Notification]:
        """Return and clear all pending notifications, oldest first."""
        notifications = list(self._pending)
        self._pending.clear()
        return notifications
