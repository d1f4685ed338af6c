"""Single-unit selection state."""

from __future__ import annotations

from dataclasses import dataclass

from outpost.domain.models import Unit, UnitID
from outpost.domain.units import UnitRegistry


@dataclass(frozen=True, slots=True)
class SelectionState:
    """Either no selection (``unit_id is None``) or exactly one selected unit."""

    unit_id: UnitID | None = None

    @property
    def is_empty(self) -> bool:
        return self.unit_id is None


NO_SELECTION = SelectionState()


class SelectionStateMachine:
    """Track which player-owned unit, if any, is currently selected.

    The machine stores the selection as an explicit id rather than a flag per
    unit; :meth:`project` writes it back onto a registry for consumers that
    read ``Unit.is_selected``.
    """

    def __init__(self, state: SelectionState = NO_SELECTION) -> None:
        self._state = state

    @property
    def state(self) -> SelectionState:
        return self._state

    def current(self) -> UnitID | None:
        return self._state.unit_id

    @staticmethod
    def next_state(state: SelectionState, unit: Unit | None) -> SelectionState:
        """Return the state that follows clicking ``unit`` while in ``state``."""

        if unit is None or unit.is_npc:
            return state
        if state.unit_id == unit.id:
            return NO_SELECTION
        return SelectionState(unit.id)

    def select(self, unit: Unit | None) -> SelectionState:
        self._state = self.next_state(self._state, unit)
        return self._state

    def commit(self) -> SelectionState:
        """Drop the selection once an action intent has been dispatched."""

        self._state = NO_SELECTION
        return self._state

    def reconcile(self, registry: UnitRegistry) -> SelectionState:
        """Clear the selection if its unit vanished from ``registry``."""

        unit_id = self._state.unit_id
        if unit_id is not None:
            unit = registry.unit_by_id(unit_id)
            if unit is None or unit.is_npc:
                self._state = NO_SELECTION
        return self._state

    def project(self, registry: UnitRegistry) -> UnitRegistry:
        """Return ``registry`` with selection flags matching this machine."""

        return registry.with_selection(self._state.unit_id, True)
