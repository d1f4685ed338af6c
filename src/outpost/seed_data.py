"""Demo board used to seed the local ledger."""

from __future__ import annotations

from outpost.domain.enums import UnitKind
from outpost.domain.rules_config import DEFAULT_RULES, RulesConfig
from outpost.domain.snapshot import CityRecord, LedgerState, UnitRecord

PLAINS, FOREST, FIELD, ROCKS, MOUNTAINS = 1, 2, 3, 4, 5


def demo_state(rules: RulesConfig = DEFAULT_RULES) -> LedgerState:
    """Return a small deterministic board with a few player and NPC units.

    The terrain pattern is fixed so local runs always start from the same
    position.
    """

    width, height = rules.grid.width, rules.grid.height
    cells: list[int] = []
    for row in range(height):
        for col in range(width):
            if (col + 2 * row) % 11 == 0:
                cells.append(FOREST)
            elif (3 * col + row) % 13 == 0:
                cells.append(FIELD)
            elif (col * row) % 17 == 5:
                cells.append(ROCKS)
            elif col == width - 3 and 4 <= row <= 8:
                cells.append(MOUNTAINS)
            else:
                cells.append(PLAINS)

    return LedgerState(
        map=cells,
        cities=[CityRecord(city_id=1, x=2, y=2)],
        units=[
            UnitRecord(
                unit_id=1, x=3, y=3, unit_type=UnitKind.WARRIOR, health=100, movement_range=2
            ),
            UnitRecord(
                unit_id=2, x=4, y=3, unit_type=UnitKind.BUILDER, health=100, movement_range=2
            ),
            UnitRecord(
                unit_id=3, x=3, y=4, unit_type=UnitKind.ARCHER, health=100, movement_range=2
            ),
        ],
        npc_units=[
            UnitRecord(
                unit_id=101, x=7, y=6, unit_type=UnitKind.WARRIOR, health=30, movement_range=2
            ),
            UnitRecord(
                unit_id=102, x=12, y=10, unit_type=UnitKind.WARRIOR, health=30, movement_range=2
            ),
        ],
    )
