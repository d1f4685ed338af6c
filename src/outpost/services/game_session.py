"""Game session: the click-driven front of the rules engine.

A session owns the current snapshot, the selection and the set of units with
an intent in flight.  Clicks resolve synchronously against that state.  Move
and attack intents are handed to the ledger on background tasks, selection is
cleared as soon as an intent leaves, and the snapshot is refreshed once the
ledger answers, whatever the answer was.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass

from outpost.domain.enums import ResourceKind, Severity, TileKind
from outpost.domain.grid import GridModel
from outpost.domain.models import CityID, Coord, UnitID
from outpost.domain.overlay import highlighted_tiles, resource_overlay
from outpost.domain.reachability import reachable
from outpost.domain.resolver import (
    ACTION_PENDING,
    NO_MOVES_LEFT,
    Attack,
    Decision,
    Deselect,
    Move,
    Rejected,
    ResolutionContext,
    Select,
    resolve_click,
)
from outpost.domain.rules_config import DEFAULT_RULES, RulesConfig
from outpost.domain.selection import SelectionStateMachine
from outpost.domain.snapshot import Snapshot
from outpost.domain.units import UnitRegistry
from outpost.errors import LedgerError
from outpost.interfaces import ILedgerClient, INotifier

logger = logging.getLogger(__name__)

REJECTION_MESSAGES = {
    NO_MOVES_LEFT: "Unit has no moves left",
    ACTION_PENDING: "Unit is still waiting for its last action",
}


@dataclass(frozen=True, slots=True)
class ClickOutcome:
    """Result of a click handled by the session."""

    decision: Decision
    city_id: CityID | None = None
    intent: asyncio.Task[None] | None = None


class GameSession:
    """Apply click decisions and keep the local view in step with the ledger."""

    def __init__(
        self,
        ledger: ILedgerClient,
        notifier: INotifier,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        snapshot: Snapshot | None = None,
    ) -> None:
        self._ledger = ledger
        self._notifier = notifier
        self._rules = rules
        self._snapshot = snapshot or Snapshot(GridModel(rules=rules.grid), UnitRegistry())
        self._selection = SelectionStateMachine()
        self._pending: set[UnitID] = set()
        self._tasks: set[asyncio.Task[None]] = set()
        self._refresh_lock = asyncio.Lock()

    # -- read side -----------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        """Latest ledger snapshot with selection flags projected onto it."""

        return Snapshot(
            grid=self._snapshot.grid,
            registry=self._selection.project(self._snapshot.registry),
        )

    def current_selection(self) -> UnitID | None:
        return self._selection.current()

    def pending_units(self) -> frozenset[UnitID]:
        return frozenset(self._pending)

    def reachable_from(self, unit_id: UnitID) -> frozenset[Coord]:
        """Return the tiles ``unit_id`` may move to.

        Raises ``KeyError`` for ids missing from the current snapshot.
        """

        unit = self._snapshot.registry.unit_by_id(unit_id)
        if unit is None:
            raise KeyError(unit_id)
        snapshot = self._snapshot
        return reachable(unit.coord, unit.movement_range, snapshot.grid, snapshot.registry)

    def highlighted(self) -> frozenset[Coord]:
        snapshot = self.snapshot
        return highlighted_tiles(snapshot.grid, snapshot.registry)

    def resource_overlay(self) -> dict[Coord, ResourceKind]:
        snapshot = self.snapshot
        return resource_overlay(snapshot.grid, snapshot.registry.selected_unit())

    def resolve(self, x: int, y: int) -> Decision:
        """Return the decision a click on ``(x, y)`` would produce, without applying it."""

        return resolve_click(self._context(), x, y).decision

    # -- write side ----------------------------------------------------------

    async def click(self, x: int, y: int) -> ClickOutcome:
        """Resolve and apply a click.

        Returns as soon as the decision is known; a move or attack intent keeps
        running on the task exposed as ``ClickOutcome.intent``.
        """

        tile = self._snapshot.grid.tile_at(x, y)
        city_id = tile.city_id if tile.kind == TileKind.VILLAGE else None

        resolution = resolve_click(self._context(), x, y)
        decision = resolution.decision
        if resolution.dispatches_intent:
            self._selection.commit()
        elif isinstance(decision, (Select, Deselect)):
            self._selection.select(decision.unit)

        intent: asyncio.Task[None] | None = None
        if isinstance(decision, Move):
            unit, to = decision.unit, decision.to
            intent = self._dispatch(
                unit.id,
                self._ledger.submit_move(unit.id, to.x, to.y),
                success=f"Unit #{int(unit.id)} {unit.kind} moved to ({to.x}, {to.y})",
                failure="Failed to move unit",
            )
        elif isinstance(decision, Attack):
            attacker, defender = decision.attacker, decision.defender
            intent = self._dispatch(
                attacker.id,
                self._ledger.submit_attack(attacker.id, defender.id),
                success=f"Unit #{int(attacker.id)} attacked unit #{int(defender.id)}",
                failure="Failed to attack enemy",
            )
        elif isinstance(decision, Rejected):
            message = REJECTION_MESSAGES.get(decision.reason, decision.reason)
            self._notifier.notify(message, Severity.ERROR)

        logger.debug("click (%s, %s) resolved to %s", x, y, decision.kind)
        return ClickOutcome(decision=decision, city_id=city_id, intent=intent)

    async def refresh(self) -> Snapshot:
        """Replace the local snapshot with a fresh one from the ledger."""

        async with self._refresh_lock:
            try:
                snapshot = await self._ledger.fetch_snapshot()
            except LedgerError as exc:
                logger.warning("snapshot refresh failed: %s", exc)
                self._notifier.notify("Failed to refresh game state", Severity.ERROR)
                raise
            self._snapshot = snapshot
            self._selection.reconcile(snapshot.registry)
        logger.debug("snapshot refreshed with %s units", len(snapshot.registry))
        return self.snapshot

    async def wait_idle(self) -> None:
        """Wait until every outstanding intent has settled."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self.wait_idle()

    # -- internals -----------------------------------------------------------

    def _context(self) -> ResolutionContext:
        return ResolutionContext(
            grid=self._snapshot.grid,
            registry=self._snapshot.registry,
            selection=self._selection.state,
            pending=frozenset(self._pending),
            rules=self._rules,
        )

    def _dispatch(
        self, unit_id: UnitID, submission: Awaitable[None], *, success: str, failure: str
    ) -> asyncio.Task[None]:
        self._pending.add(unit_id)
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            self._run_intent(unit_id, submission, success=success, failure=failure),
            name=f"outpost-intent-{int(unit_id)}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        logger.info("dispatched intent for unit %s", int(unit_id))
        return task

    async def _run_intent(
        self, unit_id: UnitID, submission: Awaitable[None], *, success: str, failure: str
    ) -> None:
        try:
            try:
                await submission
            except LedgerError as exc:
                logger.warning("intent for unit %s rejected: %s", int(unit_id), exc)
                self._notifier.notify(f"{failure}: {exc}", Severity.ERROR)
                raise
            self._notifier.notify(success, Severity.INFO)
        finally:
            try:
                await self.refresh()
            finally:
                self._pending.discard(unit_id)

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        # Failures were already logged and notified in _run_intent.
        if not task.cancelled():
            task.exception()
