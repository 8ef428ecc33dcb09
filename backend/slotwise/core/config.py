from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    # Resolve to backend/.env so scripts work from any cwd.
    model_config = SettingsConfigDict(
        env_file=str(BACKEND_ENV_FILE),
        env_file_encoding="utf-8",
        env_prefix="SLOTWISE_",
        extra="ignore",
    )

    project_name: str = "SlotWise"

    storage_backend: Literal["memory", "database"] = "memory"
    database_url: str = "sqlite:///./slotwise.db"
    database_echo: bool = False
    seed_default_programs: bool = True

    # Move suggestions scan days [0, move_search_days) of the week.
    move_search_days: int = Field(default=6, ge=1, le=7)

    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return str(value).strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
