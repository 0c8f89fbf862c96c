"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 4000
    cors_origins: str = "*"

    # ==========================================================================
    # Authentication
    # ==========================================================================

    jwt_secret_key: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    # ==========================================================================
    # Shipments
    # ==========================================================================

    default_page_size: int = 10
    max_page_size: int = 100
    seed_demo_data: bool = True

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def token_ttl_seconds(self) -> int:
        return self.jwt_access_token_expire_minutes * 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "TMS_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
