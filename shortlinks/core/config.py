"""Application configuration settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# Matched after "<" and ">" are stripped, so "<script" never matches.
DEFAULT_SUSPICIOUS_PATTERNS = [
    "javascript:",
    "data:",
    "vbscript:",
    "file:",
    "ftp:",
    "<script",
    "onload=",
    "onerror=",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_title: str = "Short Links Service"
    app_version: str = "0.1.0"
    app_description: str = "Maps long URLs to short identifiers and back"
    environment: str = "development"

    # Server
    host: str = "localhost"
    port: int = 4000
    base_url: str = "http://localhost:4000"

    # Validation
    max_url_length: int = 2048
    allowed_schemes: list[str] = ["http", "https"]
    suspicious_patterns: list[str] = DEFAULT_SUSPICIOUS_PATTERNS

    # Id allocation
    link_id_bytes: int = 4
    max_allocation_attempts: int = 10

    # Storage
    storage_type: Literal["memory", "sqlite"] = "memory"
    database_url: str = "shortlinks.db"
    store_shards: int = 16

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 100

    # CORS
    cors_origin: str = "*"
    cors_credentials: bool = False

    # Logging
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def cors_origins(self) -> list[str]:
        """Split the comma separated CORS origin setting."""
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def rate_limit(self) -> str:
        """Rate limit expressed in the `limits` string notation."""
        return f"{self.rate_limit_max_requests}/{self.rate_limit_window_seconds} seconds"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
