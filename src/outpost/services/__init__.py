"""Services wiring the rules layer to its collaborators."""

from outpost.services.game_session import ClickOutcome, GameSession
from outpost.services.local_ledger import LocalLedger
from outpost.services.notifications import Notification, NotificationLog

__all__ = [
    "ClickOutcome",
    "GameSession",
    "LocalLedger",
    "Notification",
    "NotificationLog",
]
