"""Click resolution: decide between move, attack and selection.

Rules are tried in a fixed order and the first match wins:

1. a selected unit and an empty, reachable tile produce a ``Move``;
2. a selected attack-capable unit and an NPC on the tile produce an
   ``Attack`` (or ``Rejected`` when the attacker has no moves left);
3. anything else toggles selection using the unit on the clicked tile.

Resolution is pure.  It returns the decision together with the selection
state that should follow it; applying that state and dispatching intents is
the caller's job.
"""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass, field
from typing import ClassVar

from outpost.domain.enums import DecisionKind, TileKind
from outpost.domain.grid import GridModel
from outpost.domain.models import Coord, Unit, UnitID
from outpost.domain.reachability import is_reachable
from outpost.domain.rules_config import DEFAULT_RULES, RulesConfig
from outpost.domain.selection import NO_SELECTION, SelectionState, SelectionStateMachine
from outpost.domain.units import UnitRegistry

NO_MOVES_LEFT = "no moves left"
ACTION_PENDING = "action pending"


@dataclass(frozen=True, slots=True)
class Move:
    kind: ClassVar[DecisionKind] = DecisionKind.MOVE

    unit: Unit
    to: Coord


@dataclass(frozen=True, slots=True)
class Attack:
    kind: ClassVar[DecisionKind] = DecisionKind.ATTACK

    attacker: Unit
    defender: Unit


@dataclass(frozen=True, slots=True)
class Select:
    kind: ClassVar[DecisionKind] = DecisionKind.SELECT

    unit: Unit


@dataclass(frozen=True, slots=True)
class Deselect:
    kind: ClassVar[DecisionKind] = DecisionKind.DESELECT

    unit: Unit | None = None


@dataclass(frozen=True, slots=True)
class NoOp:
    kind: ClassVar[DecisionKind] = DecisionKind.NOOP


@dataclass(frozen=True, slots=True)
class Rejected:
    kind: ClassVar[DecisionKind] = DecisionKind.REJECTED

    reason: str
    unit: Unit | None = None


Decision = Move | Attack | Select | Deselect | NoOp | Rejected


@dataclass(frozen=True, slots=True)
class ResolutionContext:
    """Everything a click is resolved against."""

    grid: GridModel
    registry: UnitRegistry
    selection: SelectionState = NO_SELECTION
    pending: Set[UnitID] = field(default_factory=frozenset)
    rules: RulesConfig = DEFAULT_RULES


@dataclass(frozen=True, slots=True)
class Resolution:
    """A decision and the selection state that follows it."""

    decision: Decision
    selection: SelectionState

    @property
    def dispatches_intent(self) -> bool:
        return isinstance(self.decision, (Move, Attack))


def can_attack(unit: Unit, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """Return True when ``unit`` may initiate an attack."""

    return unit.is_player_owned and unit.kind in rules.combat.attack_capable


def selected_unit(context: ResolutionContext) -> Unit | None:
    """Return the selected unit, ignoring stale ids and NPCs."""

    unit_id = context.selection.unit_id
    if unit_id is None:
        return None
    unit = context.registry.unit_by_id(unit_id)
    if unit is None or unit.is_npc:
        return None
    return unit


def resolve_click(context: ResolutionContext, x: int, y: int) -> Resolution:
    """Resolve a click on ``(x, y)`` against ``context``."""

    keep = Resolution(NoOp(), context.selection)

    # Village tiles open the city view upstream.
    if context.grid.tile_at(x, y).kind == TileKind.VILLAGE:
        return keep

    selected = selected_unit(context)
    target = context.registry.unit_at(x, y)
    click = Coord(x, y)

    if (
        selected is not None
        and target is None
        and is_reachable(selected.coord, click, selected.movement_range, context.grid)
    ):
        if selected.id in context.pending:
            return Resolution(Rejected(ACTION_PENDING, selected), context.selection)
        return Resolution(Move(selected, click), NO_SELECTION)

    if (
        selected is not None
        and target is not None
        and target.is_npc
        and can_attack(selected, context.rules)
    ):
        if selected.id in context.pending:
            return Resolution(Rejected(ACTION_PENDING, selected), context.selection)
        if selected.movement_range == 0:
            return Resolution(Rejected(NO_MOVES_LEFT, selected), context.selection)
        return Resolution(Attack(selected, target), NO_SELECTION)

    if target is None or target.is_npc:
        return keep

    following = SelectionStateMachine.next_state(context.selection, target)
    if following.unit_id is None:
        return Resolution(Deselect(target), following)
    return Resolution(Select(target), following)
