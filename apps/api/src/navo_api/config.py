"""API configuration via environment variables."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(StrEnum):
    DEVELOPMENT = "development"
    PREVIEW = "preview"
    PRODUCTION = "production"


class RateLimitPolicy(BaseModel):
    """Named fixed-window limit."""

    limit: int
    window_seconds: int


DEFAULT_RATE_LIMIT_POLICIES: dict[str, RateLimitPolicy] = {
    "public": RateLimitPolicy(limit=60, window_seconds=60),
    "search": RateLimitPolicy(limit=10, window_seconds=60),
    "detail": RateLimitPolicy(limit=30, window_seconds=60),
    "sensitive": RateLimitPolicy(limit=10, window_seconds=60),
}


class ApiSettings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    app_env: AppEnv = AppEnv.DEVELOPMENT
    log_level: str = "INFO"
    log_json: bool = True

    # Store: "memory" for a single instance, "redis" when scaled out
    store_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"

    # Search provider: "mock" or "amadeus"
    search_provider: str = "mock"
    allow_mocks_in_prod: bool = False
    amadeus_base_url: str = "https://test.api.amadeus.com"
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_timeout: float = 15.0
    amadeus_max_retries: int = 2

    cors_origins: list[str] = ["http://localhost:3000"]

    rate_limit_salt: str = "navo-dev-salt"
    rate_limit_policies: dict[str, RateLimitPolicy] = DEFAULT_RATE_LIMIT_POLICIES

    # TTLs in seconds
    search_cache_ttl: int = 300  # 5 min
    session_ttl: int = 900  # 15 min
    flight_ttl: int = 600  # 10 min

    model_config = SettingsConfigDict(
        env_prefix="NAVO_", env_file=".env", extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.app_env is AppEnv.PRODUCTION

    def secret_values(self) -> list[str]:
        """Configured secrets that must never reach a log line."""
        return [s for s in (self.amadeus_client_secret, self.rate_limit_salt) if s]


settings = ApiSettings()
