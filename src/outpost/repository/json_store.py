"""JSON-based repository for ledger state documents."""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter

from outpost.domain.snapshot import LedgerState


class JsonStateRepository:
    """Persist a ledger state document as a JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._adapter: TypeAdapter[LedgerState] = TypeAdapter(LedgerState)

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, state: LedgerState) -> Path:
        """Serialize ``state`` to disk and return the file path.

        The document is written next to the target and renamed over it, so a
        concurrent ``load`` sees either the old or the new document.
        """

        payload = self._adapter.dump_json(state, indent=2)
        scratch = self.path.with_name(f"{self.path.name}.tmp")
        scratch.write_bytes(payload)
        scratch.replace(self.path)
        return self.path

    def load(self) -> LedgerState:
        """Load the previously saved state document.

        Raises ``FileNotFoundError`` when nothing has been saved yet.
        """

        data = self.path.read_bytes()
        return self._adapter.validate_json(data)
