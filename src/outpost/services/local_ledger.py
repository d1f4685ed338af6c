"""Development ledger backed by a JSON state document.

``LocalLedger`` plays the remote authority for local runs and tests.  It
validates intents against the same range rules the engine uses, applies them
to the stored document and serves fresh snapshots.  Combat numbers come from
:class:`~outpost.domain.rules_config.CombatRules`; the real ledger is free to
resolve combat differently.
"""

from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError

from outpost.domain.models import Coord, UnitID
from outpost.domain.reachability import is_reachable, manhattan_distance
from outpost.domain.rules_config import DEFAULT_RULES, RulesConfig
from outpost.domain.snapshot import LedgerState, Snapshot, UnitRecord, build_grid, build_snapshot
from outpost.errors import LedgerError
from outpost.repository import JsonStateRepository

logger = logging.getLogger(__name__)


class LocalLedger:
    """In-process ledger implementing :class:`~outpost.interfaces.ILedgerClient`."""

    def __init__(
        self,
        repository: JsonStateRepository,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        latency_seconds: float = 0.0,
    ) -> None:
        self._repository = repository
        self._rules = rules
        self._latency = max(latency_seconds, 0.0)
        self._lock = asyncio.Lock()

    async def fetch_snapshot(self) -> Snapshot:
        await self._delay()
        async with self._lock:
            state = await self._load()
        return build_snapshot(state, rules=self._rules)

    async def submit_move(self, unit_id: UnitID, x: int, y: int) -> None:
        await self._delay()
        async with self._lock:
            state = await self._load()
            record = _find(state.units, unit_id)
            if record is None:
                raise LedgerError(f"unit {int(unit_id)} is not a player unit")
            if record.movement_range <= 0:
                raise LedgerError(f"unit {int(unit_id)} has no moves left")

            grid = build_grid(state, rules=self._rules)
            origin, target = Coord(record.x, record.y), Coord(x, y)
            if not is_reachable(origin, target, record.movement_range, grid):
                raise LedgerError(f"({x}, {y}) is out of range for unit {int(unit_id)}")
            if _occupied(state, target):
                raise LedgerError(f"({x}, {y}) is occupied")

            record.movement_range -= manhattan_distance(origin, target)
            record.x, record.y = x, y
            await asyncio.to_thread(self._repository.save, state)
        logger.info("unit %s moved to (%s, %s)", int(unit_id), x, y)

    async def submit_attack(self, attacker_id: UnitID, defender_id: UnitID) -> None:
        await self._delay()
        combat = self._rules.combat
        async with self._lock:
            state = await self._load()
            attacker = _find(state.units, attacker_id)
            defender = _find(state.npc_units, defender_id)
            if attacker is None:
                raise LedgerError(f"unit {int(attacker_id)} is not a player unit")
            if defender is None:
                raise LedgerError(f"unit {int(defender_id)} is not an NPC unit")
            if attacker.unit_type not in combat.attack_capable:
                raise LedgerError(f"{attacker.unit_type} units cannot attack")
            if attacker.movement_range <= 0:
                raise LedgerError(f"unit {int(attacker_id)} has no moves left")

            defender.health -= combat.attack_damage
            if defender.health <= 0:
                state.npc_units.remove(defender)
            else:
                attacker.health -= combat.counter_damage
                if attacker.health <= 0:
                    state.units.remove(attacker)
            attacker.movement_range = 0
            await asyncio.to_thread(self._repository.save, state)
        logger.info(
            "unit %s attacked unit %s (defender health %s)",
            int(attacker_id),
            int(defender_id),
            max(defender.health, 0),
        )

    async def _load(self) -> LedgerState:
        try:
            return await asyncio.to_thread(self._repository.load)
        except FileNotFoundError as exc:
            raise LedgerError(f"no ledger state at {self._repository.path}") from exc
        except ValidationError as exc:
            raise LedgerError(f"unreadable ledger state at {self._repository.path}") from exc

    async def _delay(self) -> None:
        if self._latency:
            await asyncio.sleep(self._latency)


def _find(records: list[UnitRecord], unit_id: UnitID) -> UnitRecord | None:
    for record in records:
        if record.unit_id == int(unit_id):
            return record
    return None


def _occupied(state: LedgerState, coord: Coord) -> bool:
    return any(
        record.x == coord.x and record.y == coord.y for record in [*state.units, *state.npc_units]
    )
