"""HTTP routes for the Outpost API."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from outpost import __version__
from outpost.api.runtime import ApiState
from outpost.domain.catalog import UNIT_CATALOG, UnitProfile, profile_for
from outpost.domain.enums import UnitKind
from outpost.domain.models import Coord, Unit, UnitID
from outpost.domain.resolver import Attack, Decision, Deselect, Move, Rejected, Select
from outpost.domain.snapshot import Snapshot
from outpost.errors import LedgerError

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class CoordPayload(BaseModel):
    x: int
    y: int


class TilePayload(BaseModel):
    x: int
    y: int
    kind: str
    city_id: int | None = None


class UnitPayload(BaseModel):
    id: int
    x: int
    y: int
    kind: str
    health: int
    movement_range: int
    is_selected: bool
    is_npc: bool


class ResourcePayload(BaseModel):
    x: int
    y: int
    resource: str


class BoardPayload(BaseModel):
    width: int
    height: int
    tiles: list[TilePayload]
    units: list[UnitPayload]
    selected_unit_id: int | None
    pending_unit_ids: list[int]
    highlighted: list[CoordPayload]
    resources: list[ResourcePayload]


class ClickRequest(BaseModel):
    x: int
    y: int


class DecisionPayload(BaseModel):
    kind: str
    unit_id: int | None = None
    to: CoordPayload | None = None
    attacker_id: int | None = None
    defender_id: int | None = None
    reason: str | None = None


class ClickResponse(BaseModel):
    decision: DecisionPayload
    city_id: int | None = None
    selected_unit_id: int | None


class SelectionResponse(BaseModel):
    unit_id: int | None


class CatalogEntry(BaseModel):
    kind: str
    label: str
    description: str
    gold_cost: int
    build_turns: int


class NotificationPayload(BaseModel):
    message: str
    severity: str
    created_at: datetime


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    registry = state.session.snapshot.registry
    return {
        "status": "ok",
        "version": __version__,
        "units": len(registry),
        "player_units": len(registry.player_units()),
        "npc_units": len(registry.npc_units()),
        "pending": len(state.session.pending_units()),
    }


@router.get("/board", response_model=BoardPayload)
async def board(state: ApiStateDep) -> BoardPayload:
    return _board_payload(state)


@router.post("/click", response_model=ClickResponse)
async def click(request: ClickRequest, state: ApiStateDep) -> ClickResponse:
    outcome = await state.session.click(request.x, request.y)
    selection = state.session.current_selection()
    return ClickResponse(
        decision=_decision_payload(outcome.decision),
        city_id=outcome.city_id,
        selected_unit_id=int(selection) if selection is not None else None,
    )


@router.get("/selection", response_model=SelectionResponse)
async def selection(state: ApiStateDep) -> SelectionResponse:
    unit_id = state.session.current_selection()
    return SelectionResponse(unit_id=int(unit_id) if unit_id is not None else None)


@router.get("/units/{unit_id}/reachable", response_model=list[CoordPayload])
async def unit_reachable(unit_id: int, state: ApiStateDep) -> list[CoordPayload]:
    try:
        coords = state.session.reachable_from(UnitID(unit_id))
    except KeyError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Unit {unit_id} not found") from exc
    return _coords(coords)


@router.post("/refresh", response_model=BoardPayload)
async def refresh(state: ApiStateDep) -> BoardPayload:
    try:
        await state.session.refresh()
    except LedgerError as exc:
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return _board_payload(state)


@router.get("/catalog", response_model=list[CatalogEntry])
async def catalog() -> list[CatalogEntry]:
    return [_catalog_entry(profile) for profile in UNIT_CATALOG.values()]


@router.get("/catalog/{kind}", response_model=CatalogEntry)
async def catalog_entry(kind: UnitKind) -> CatalogEntry:
    return _catalog_entry(profile_for(kind))


@router.get("/notifications", response_model=list[NotificationPayload])
async def notifications(state: ApiStateDep) -> list[NotificationPayload]:
    return [
        NotificationPayload(
            message=entry.message,
            severity=entry.severity.value,
            created_at=entry.created_at,
        )
        for entry in state.notifications.recent()
    ]


def _board_payload(state: ApiState) -> BoardPayload:
    session = state.session
    snapshot: Snapshot = session.snapshot
    selection = session.current_selection()
    return BoardPayload(
        width=snapshot.grid.width,
        height=snapshot.grid.height,
        tiles=[
            TilePayload(x=tile.x, y=tile.y, kind=tile.kind.value, city_id=tile.city_id)
            for tile in snapshot.grid.tiles()
        ],
        units=[_unit_payload(unit) for unit in snapshot.registry.all_units()],
        selected_unit_id=int(selection) if selection is not None else None,
        pending_unit_ids=sorted(int(unit_id) for unit_id in session.pending_units()),
        highlighted=_coords(session.highlighted()),
        resources=[
            ResourcePayload(x=coord.x, y=coord.y, resource=resource.value)
            for coord, resource in sorted(
                session.resource_overlay().items(), key=lambda item: (item[0].y, item[0].x)
            )
        ],
    )


def _unit_payload(unit: Unit) -> UnitPayload:
    return UnitPayload(
        id=int(unit.id),
        x=unit.x,
        y=unit.y,
        kind=unit.kind.value,
        health=unit.health,
        movement_range=unit.movement_range,
        is_selected=unit.is_selected,
        is_npc=unit.is_npc,
    )


def _catalog_entry(profile: UnitProfile) -> CatalogEntry:
    return CatalogEntry(
        kind=profile.kind.value,
        label=profile.label,
        description=profile.description,
        gold_cost=profile.gold_cost,
        build_turns=profile.build_turns,
    )


def _coords(coords: frozenset[Coord]) -> list[CoordPayload]:
    return [CoordPayload(x=c.x, y=c.y) for c in sorted(coords, key=lambda c: (c.y, c.x))]


def _decision_payload(decision: Decision) -> DecisionPayload:
    payload = DecisionPayload(kind=decision.kind.value)
    if isinstance(decision, Move):
        payload.unit_id = int(decision.unit.id)
        payload.to = CoordPayload(x=decision.to.x, y=decision.to.y)
    elif isinstance(decision, Attack):
        payload.attacker_id = int(decision.attacker.id)
        payload.defender_id = int(decision.defender.id)
    elif isinstance(decision, (Select, Deselect)):
        payload.unit_id = int(decision.unit.id) if decision.unit is not None else None
    elif isinstance(decision, Rejected):
        payload.reason = decision.reason
        payload.unit_id = int(decision.unit.id) if decision.unit is not None else None
    return payload
