"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_path: Path = Path("hair_diary.json")
    storage_key: str = "hairDiary"
    flip_delay_seconds: float = 0.3
    settle_delay_seconds: float = 0.3
    landing_page: Literal["first", "last"] = "last"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="HAIR_DIARY_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
