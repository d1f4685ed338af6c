"""Exception hierarchy shared by the Outpost packages."""

from __future__ import annotations


class OutpostError(RuntimeError):
    """Base class for every error raised by Outpost."""


class SnapshotError(OutpostError, ValueError):
    """Raised when a ledger payload cannot form a consistent snapshot."""


class LedgerError(OutpostError):
    """Raised when the ledger rejects an intent or cannot serve a snapshot."""
