"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: str = "*"

    # MongoDB (database name in the URI wins over mongodb_db)
    mongodb_uri: str = Field(
        "mongodb://localhost:27017/job_platform",
        validation_alias=AliasChoices("mongodb_uri", "mongo_uri"),
    )
    mongodb_db: str = "job_platform"
    init_indexes: bool = True

    # JWT Auth
    jwt_secret_key: str = Field(
        "change-this-secret",
        validation_alias=AliasChoices("jwt_secret_key", "secret_key"),
    )
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60

    # Logging
    log_level: str = "INFO"

    @property
    def cors_origin_list(self) -> list:
        """Comma separated CORS origins as a list"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
