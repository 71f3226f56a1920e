"""Lightweight configuration for the Stronghold tools."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from ``STRONGHOLD_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STRONGHOLD_",
        extra="ignore",
    )

    data_dir: Path = Field(default=Path("saves"), description="Where save slots live")
    rules_version: str = Field(default="1.0", description="Ruleset version used by the domain")
    event_chance: int = Field(
        default=15,
        description="Percent chance of a random event once the cooldown has elapsed",
        ge=0,
        le=100,
    )
    event_cooldown_seconds: float = Field(
        default=5.0,
        description="Real-time seconds that must pass between two random events",
        ge=0.0,
    )
    rng_seed: str | None = Field(
        default=None,
        description="Seed for new sessions; unset means a fresh seed per session",
    )
    pacing_seconds: float = Field(
        default=1.0,
        description="Seconds per step when the console animates a pacing delay",
        ge=0.0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
