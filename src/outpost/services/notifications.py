"""User-facing notification log."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime

from outpost.domain.enums import Severity

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Notification:
    message: str
    severity: Severity
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class NotificationLog:
    """Keep the most recent notifications and mirror them to the logger."""

    def __init__(self, limit: int = 50) -> None:
        self._entries: deque[Notification] = deque(maxlen=limit)

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        self._entries.append(Notification(message, severity))
        level = logging.ERROR if severity == Severity.ERROR else logging.INFO
        logger.log(level, message)

    def recent(self) -> list[Notification]:
        return list(self._entries)
