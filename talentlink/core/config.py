"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB (users, jobs, courses, enrollments, posts)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "talentlink"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Mentor directory cache windows (seconds)
    mentor_cache_seconds: int = 300
    mentor_stats_cache_seconds: int = 600

    # Client library (used by talentlink.client)
    api_base_url: str = "http://localhost:8000/api"
    client_timeout: float = 10.0

    # App
    log_level: str = "INFO"
    debug: bool = True

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
