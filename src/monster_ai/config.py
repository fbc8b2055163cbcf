"""Runtime configuration for the monster AI engine."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="MONSTER_AI_", env_file=".env", extra="ignore")

    app_name: str = "monster-ai"
    log_level: str = "INFO"
    chunk_size: int = Field(default=20, gt=0, description="Tiles per chunk edge.")
    max_path_steps: int = Field(default=20, ge=0, description="Default step cap for straight-line paths.")
    max_scan_distance: float = Field(
        default=20.0,
        gt=0,
        description="Furthest distance a group will consider when choosing a move target.",
    )
    snapshot_path: str | None = Field(
        default=None,
        description="JSON world snapshot read by the developer CLI.",
    )


settings = Settings()
