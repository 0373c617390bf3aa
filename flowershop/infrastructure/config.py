"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://flowershop:flowershop_dev_password@db:5432/flowershop"

    # Catalog storage: "database" or "memory"
    catalog_backend: str = "database"

    # Authentication
    flowershop_api_key: str = "dev-api-key-change-in-production"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
