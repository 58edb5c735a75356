import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Job Cost Dashboard API"
    log_level: str = "INFO"
    dataset_path: Path | None = Field(
        default=None,
        description="JSON dataset used to seed the in-memory record store; the demo seed is used when unset",
    )
    cors_origins: Annotated[list[str], NoDecode] = []
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")

    model_config = SettingsConfigDict(env_prefix="JOBCOST_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """``.env.<JOBCOST_ENV>`` when present, else ``.env``, else no file."""

    env = os.getenv("JOBCOST_ENV", "dev")
    for candidate in (BASE_DIR / f".env.{env}", BASE_DIR / ".env"):
        if candidate.is_file():
            return str(candidate)
    return None
