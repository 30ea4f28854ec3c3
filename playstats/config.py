"""Engine configuration."""
import logging
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment."""

    # Time
    minutes_per_hour: int = 60

    # Logging achievements (every Nth hour/session/play)
    hours_achievement_step: int = 100
    sessions_achievement_step: int = 100
    plays_achievement_step: int = 250

    # Rankings
    default_top_n: int = 3

    # Caller-side memoization
    cache_maxsize: int = 256
    cache_ttl_seconds: int = 300

    # Logging
    log_level: str = "INFO"

    class Config:
        env_prefix = "PLAYSTATS_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for applications embedding the engine."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
