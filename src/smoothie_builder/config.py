"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from smoothie_builder.services.aggregator import ProteinMultiplierMode

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    catalog_path: Path | None = None
    state_path: Path = Path(".smoothie_state.json")
    protein_multiplier_mode: ProteinMultiplierMode = ProteinMultiplierMode.INFORMATIONAL
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="SMOOTHIE_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
