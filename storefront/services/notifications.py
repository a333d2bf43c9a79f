"""Alert collaborator for cart and wishlist mutations.

Alerts are purely observational: a notifier can never veto or undo the
mutation it reports. The default NotificationFeed logs every alert and keeps
the most recent ones for the presentation layer to drain.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol

logger = logging.getLogger("uvicorn.error")


class Severity(str, Enum):
    """Alert severity, mirrored by the UI toast style."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notifier(Protocol):
    def notify(self, severity: Severity, message: str) -> None: ...


@dataclass(frozen=True)
class Alert:
    severity: Severity
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


_LOG_LEVELS = {
    Severity.SUCCESS: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class NotificationFeed:
    """Notifier that logs alerts and buffers the latest `maxlen` of them."""

    def __init__(self, maxlen: int = 50) -> None:
        self._alerts: deque[Alert] = deque(maxlen=maxlen)

    def notify(self, severity: Severity, message: str) -> None:
        logger.log(_LOG_LEVELS[severity], f"[{severity.value}] {message}")
        self._alerts.append(Alert(severity=severity, message=message))

    def peek(self) -> list[Alert]:
        return list(self._alerts)

    def drain(self) -> list[Alert]:
        """Return buffered alerts oldest-first and empty the buffer."""
        alerts = list(self._alerts)
        self._alerts.clear()
        return alerts
