"""Ledger and notification protocol interfaces.

The ledger is the remote authority that owns game state.  The engine only
ever reads snapshots from it and submits intents to it; whatever the ledger
decides becomes visible through the next snapshot.
"""

from typing import Protocol

from outpost.domain.enums import Severity
from outpost.domain.models import UnitID
from outpost.domain.snapshot import Snapshot


class ILedgerClient(Protocol):
    """Protocol defining the operations the engine needs from the ledger."""

    async def fetch_snapshot(self) -> Snapshot:
        """Return the current authoritative grid and unit state.

        Raises:
            LedgerError: If the state cannot be fetched
        """
        ...

    async def submit_move(self, unit_id: UnitID, x: int, y: int) -> None:
        """Ask the ledger to move a unit.

        Args:
            unit_id: Unit to move
            x: Destination column
            y: Destination row

        Raises:
            LedgerError: If the ledger rejects the move
        """
        ...

    async def submit_attack(self, attacker_id: UnitID, defender_id: UnitID) -> None:
        """Ask the ledger to resolve an attack.

        Args:
            attacker_id: Player unit initiating the attack
            defender_id: NPC unit being attacked

        Raises:
            LedgerError: If the ledger rejects the attack
        """
        ...


class INotifier(Protocol):
    """Fire-and-forget sink for user-visible messages."""

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        """Record a message for the player."""
        ...
