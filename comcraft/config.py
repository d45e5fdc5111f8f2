"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "ComCraft Commerce"
    debug: bool = True

    # ── Store ────────────────────────────────────────────
    store_backend: str = "memory"  # "memory" | "mongo"

    # ── MongoDB ──────────────────────────────────────────
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "comcraft"
    mongodb_timeout_ms: int = 5000
    users_collection: str = "users"
    orders_collection: str = "orders"
    command_permissions_collection: str = "guild_command_permissions"

    # ── API ──────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
