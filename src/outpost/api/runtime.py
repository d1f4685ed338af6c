"""Runtime primitives backing the Outpost HTTP API."""

from __future__ import annotations

import logging

from outpost.config import Settings, get_settings
from outpost.domain.rules_config import DEFAULT_RULES, RulesConfig
from outpost.errors import LedgerError
from outpost.repository import JsonStateRepository
from outpost.seed_data import demo_state
from outpost.services import GameSession, LocalLedger, NotificationLog

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        self.repository = JsonStateRepository(self.settings.state_path)
        self.ledger = LocalLedger(
            self.repository,
            rules=rules,
            latency_seconds=self.settings.ledger_latency_seconds,
        )
        self.notifications = NotificationLog(limit=self.settings.notification_limit)
        self.session = GameSession(self.ledger, self.notifications, rules=rules)

    async def startup(self) -> None:
        if not self.repository.exists() and self.settings.seed_demo:
            logger.info("seeding demo board at %s", self.repository.path)
            self.repository.save(demo_state(self.rules))
        try:
            await self.session.refresh()
        except LedgerError:
            logger.warning("starting without a snapshot; POST /refresh once the ledger is ready")

    async def shutdown(self) -> None:
        await self.session.close()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
