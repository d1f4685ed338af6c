"""Protocol-based interfaces for the collaborators the engine talks to."""

from outpost.interfaces.ledger import ILedgerClient, INotifier

__all__ = [
    "ILedgerClient",
    "INotifier",
]
