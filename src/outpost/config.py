"""Lightweight configuration for the Outpost tools."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(
        env_prefix="OUTPOST_", env_file=".env", env_file_encoding="utf-8"
    )

    data_dir: Path = Field(default=Path("data"), description="Where the local ledger state lives")
    log_level: str = Field(default="INFO", description="Root logger level")
    ledger_latency_seconds: float = Field(
        default=0.0,
        description="Artificial delay applied by the local ledger to every call",
        ge=0.0,
    )
    seed_demo: bool = Field(
        default=True,
        description="Write the demo board when no ledger state exists yet",
    )
    notification_limit: int = Field(default=50, description="Notifications kept in memory", gt=0)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )

    @property
    def state_path(self) -> Path:
        return self.data_dir / "ledger.json"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
