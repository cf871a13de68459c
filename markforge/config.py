"""Global configuration helpers for MarkForge."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarkForgeSettings(BaseSettings):
    """Runtime configuration resolved from environment variables."""

    model_config = SettingsConfigDict(env_prefix="MARKFORGE_", env_file=".env", extra="ignore")

    candidate_count: int = Field(default=15, ge=1)
    top_k: int = Field(default=5, ge=1)
    quality_threshold: float = Field(default=85.0, ge=0, le=100)
    max_retries: int = Field(default=10, ge=0)
    max_workers: int = Field(default=1, ge=1)
    render_timeout_seconds: float = Field(default=5.0, gt=0)


settings = MarkForgeSettings()
