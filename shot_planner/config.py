"""Runtime settings, read from SHOT_PLANNER_* environment variables or .env."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from shot_planner.breakdown.rules import DEFAULT_SHOT_COUNT, SESSION_RESTORE_TIMEOUT_SEC


class Settings(BaseSettings):
    default_shot_count: int = DEFAULT_SHOT_COUNT
    include_inserts: bool = True
    max_retries: int = 3
    session_restore_timeout_sec: int = SESSION_RESTORE_TIMEOUT_SEC
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="SHOT_PLANNER_", env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
