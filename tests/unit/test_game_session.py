"""Tests for the game session: dispatch, pending guard and refresh."""

from __future__ import annotations

import asyncio

import pytest

from outpost.domain import models as dm
from outpost.domain.enums import Severity, UnitKind
from outpost.domain.resolver import (
    ACTION_PENDING,
    Attack,
    Deselect,
    Move,
    NoOp,
    Rejected,
    Select,
)
from outpost.domain.snapshot import CityRecord, LedgerState, Snapshot, UnitRecord, build_snapshot
from outpost.errors import LedgerError
from outpost.services import GameSession

U1 = dm.UnitID(1)
U2 = dm.UnitID(2)
N1 = dm.UnitID(100)


class FakeLedger:
    """Ledger double applying intents to an in-memory state document."""

    def __init__(self, state: LedgerState) -> None:
        self.state = state
        self.moves: list[tuple[int, int, int]] = []
        self.attacks: list[tuple[int, int]] = []
        self.fetches = 0
        self.gate: asyncio.Event | None = None
        self.submit_error: str | None = None
        self.fetch_error: str | None = None

    async def fetch_snapshot(self) -> Snapshot:
        self.fetches += 1
        if self.fetch_error:
            raise LedgerError(self.fetch_error)
        return build_snapshot(self.state)

    async def submit_move(self, unit_id: dm.UnitID, x: int, y: int) -> None:
        self.moves.append((int(unit_id), x, y))
        await self._settle()
        for record in self.state.units:
            if record.unit_id == int(unit_id):
                record.x, record.y = x, y

    async def submit_attack(self, attacker_id: dm.UnitID, defender_id: dm.UnitID) -> None:
        self.attacks.append((int(attacker_id), int(defender_id)))
        await self._settle()
        self.state.npc_units = [r for r in self.state.npc_units if r.unit_id != int(defender_id)]

    async def _settle(self) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.submit_error:
            raise LedgerError(self.submit_error)


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, Severity]] = []

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.messages.append((message, severity))


def _state() -> LedgerState:
    return LedgerState(
        map=[1] * 400,
        cities=[CityRecord(city_id=3, x=2, y=2)],
        units=[
            UnitRecord(
                unit_id=1, x=5, y=5, unit_type=UnitKind.WARRIOR, health=100, movement_range=3
            ),
            UnitRecord(
                unit_id=2, x=10, y=10, unit_type=UnitKind.ARCHER, health=100, movement_range=2
            ),
        ],
        npc_units=[
            UnitRecord(
                unit_id=100, x=6, y=5, unit_type=UnitKind.WARRIOR, health=30, movement_range=1
            ),
        ],
    )


async def _session() -> tuple[GameSession, FakeLedger, RecordingNotifier]:
    ledger = FakeLedger(_state())
    notifier = RecordingNotifier()
    session = GameSession(ledger, notifier)
    await session.refresh()
    return session, ledger, notifier


@pytest.mark.asyncio
async def test_click_selects_and_projects_flags():
    session, _, _ = await _session()

    outcome = await session.click(5, 5)

    assert isinstance(outcome.decision, Select)
    assert outcome.intent is None
    assert session.current_selection() == U1
    assert session.snapshot.registry.unit_by_id(U1).is_selected
    assert session.highlighted() == session.reachable_from(U1)


@pytest.mark.asyncio
async def test_move_clears_selection_and_refreshes_after_ack():
    session, ledger, notifier = await _session()
    await session.click(5, 5)

    outcome = await session.click(5, 7)

    assert outcome.decision == Move(session.snapshot.registry.unit_by_id(U1), dm.Coord(5, 7))
    assert session.current_selection() is None
    assert session.pending_units() == {U1}

    await outcome.intent

    assert ledger.moves == [(1, 5, 7)]
    assert ledger.fetches == 2
    assert session.pending_units() == frozenset()
    moved = session.snapshot.registry.unit_by_id(U1)
    assert (moved.x, moved.y) == (5, 7)
    assert notifier.messages[-1] == ("Unit #1 warrior moved to (5, 7)", Severity.INFO)


@pytest.mark.asyncio
async def test_second_intent_for_pending_unit_is_rejected():
    session, ledger, notifier = await _session()
    ledger.gate = asyncio.Event()

    await session.click(5, 5)
    first = await session.click(5, 7)
    assert isinstance(first.decision, Move)

    reselect = await session.click(5, 5)
    assert isinstance(reselect.decision, Select)
    again = await session.click(4, 5)
    assert isinstance(again.decision, Rejected)
    assert again.decision.reason == ACTION_PENDING
    assert again.intent is None
    assert session.current_selection() == U1
    assert notifier.messages[-1][1] == Severity.ERROR

    # A different unit is free to act while the first intent is outstanding.
    await session.click(10, 10)
    other = await session.click(10, 11)
    assert isinstance(other.decision, Move)
    await asyncio.sleep(0)
    assert session.pending_units() == {U1, U2}
    assert ledger.moves == [(1, 5, 7), (2, 10, 11)]

    ledger.gate.set()
    await session.wait_idle()
    assert session.pending_units() == frozenset()


@pytest.mark.asyncio
async def test_failed_intent_resynchronises_and_propagates():
    session, ledger, notifier = await _session()
    ledger.submit_error = "rejected by authority"

    await session.click(5, 5)
    outcome = await session.click(5, 6)

    with pytest.raises(LedgerError):
        await outcome.intent

    assert session.current_selection() is None
    assert session.pending_units() == frozenset()
    assert ledger.fetches == 2
    unit = session.snapshot.registry.unit_by_id(U1)
    assert (unit.x, unit.y) == (5, 5)
    assert ("Failed to move unit: rejected by authority", Severity.ERROR) in notifier.messages


@pytest.mark.asyncio
async def test_attack_dispatches_to_ledger():
    session, ledger, _ = await _session()
    await session.click(5, 5)

    outcome = await session.click(6, 5)
    assert isinstance(outcome.decision, Attack)
    await outcome.intent

    assert ledger.attacks == [(1, 100)]
    assert session.snapshot.registry.unit_by_id(N1) is None


@pytest.mark.asyncio
async def test_village_click_reports_city():
    session, _, _ = await _session()

    outcome = await session.click(2, 2)

    assert outcome.decision == NoOp()
    assert outcome.city_id == dm.CityID(3)


@pytest.mark.asyncio
async def test_resolve_does_not_apply_the_decision():
    session, ledger, _ = await _session()

    assert isinstance(session.resolve(5, 5), Select)
    assert session.current_selection() is None
    assert ledger.moves == []


@pytest.mark.asyncio
async def test_reachable_from_unknown_unit():
    session, _, _ = await _session()

    assert dm.Coord(5, 8) in session.reachable_from(U1)
    with pytest.raises(KeyError):
        session.reachable_from(dm.UnitID(999))


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_snapshot():
    session, ledger, notifier = await _session()
    before = session.snapshot.registry.all_units()
    ledger.fetch_error = "ledger offline"

    with pytest.raises(LedgerError):
        await session.refresh()

    assert session.snapshot.registry.all_units() == before
    assert notifier.messages[-1] == ("Failed to refresh game state", Severity.ERROR)


@pytest.mark.asyncio
async def test_refresh_drops_selection_of_vanished_unit():
    session, ledger, _ = await _session()
    await session.click(10, 10)
    assert session.current_selection() == U2

    ledger.state.units = [r for r in ledger.state.units if r.unit_id != 2]
    await session.refresh()

    assert session.current_selection() is None


@pytest.mark.asyncio
async def test_selection_clicks_switch_and_toggle():
    session, ledger, _ = await _session()

    await session.click(5, 5)
    switched = await session.click(10, 10)
    assert isinstance(switched.decision, Select)
    assert switched.decision.unit.id == U2
    assert session.current_selection() == U2
    assert not session.snapshot.registry.unit_by_id(U1).is_selected

    toggled = await session.click(10, 10)
    assert isinstance(toggled.decision, Deselect)
    assert session.current_selection() is None

    npc = await session.click(6, 5)
    assert npc.decision == NoOp()
    assert session.current_selection() is None
    assert ledger.moves == [] and ledger.attacks == []
