"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from query_cache.core.constants import (
    CACHE_KEY_PREFIX,
    DEFAULT_MAX_ENTRY_BYTES,
    DEFAULT_MAX_PENDING_WRITES,
    DEFAULT_MEMORY_CACHE_MAX_ENTRIES,
)

_TELEMETRY_EXPORTERS = ("console", "otlp", "none")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults; see validate_limits for the
    combinations rejected at load time.
    """

    # App
    app_name: str = "query-cache"
    app_version: str = "1.0.0"
    debug: bool = False

    # Redis store (falls back to the in-memory store when disabled)
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_connect_timeout: int = 5
    redis_reconnect_cooldown_seconds: float = 30.0

    # Response cache
    cache_key_prefix: str = CACHE_KEY_PREFIX
    cache_max_entry_bytes: int | None = DEFAULT_MAX_ENTRY_BYTES
    cache_max_pending_writes: int = DEFAULT_MAX_PENDING_WRITES
    memory_cache_max_entries: int = DEFAULT_MEMORY_CACHE_MAX_ENTRIES

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Validate cache limits, key prefix and telemetry exporter."""
        if not self.cache_key_prefix:
            raise ValueError("CACHE_KEY_PREFIX must be a non-empty string.")
        if self.cache_max_pending_writes <= 0:
            raise ValueError(
                f"CACHE_MAX_PENDING_WRITES must be positive, got: {self.cache_max_pending_writes}"
            )
        if self.cache_max_entry_bytes is not None and self.cache_max_entry_bytes <= 0:
            raise ValueError(
                f"CACHE_MAX_ENTRY_BYTES must be positive or unset, got: {self.cache_max_entry_bytes}"
            )
        if self.redis_reconnect_cooldown_seconds < 0:
            raise ValueError(
                "REDIS_RECONNECT_COOLDOWN_SECONDS must be non-negative, "
                f"got: {self.redis_reconnect_cooldown_seconds}"
            )
        if self.memory_cache_max_entries <= 0:
            raise ValueError(
                f"MEMORY_CACHE_MAX_ENTRIES must be positive, got: {self.memory_cache_max_entries}"
            )
        if self.telemetry_exporter not in _TELEMETRY_EXPORTERS:
            raise ValueError(
                f"Invalid telemetry_exporter '{self.telemetry_exporter}'. "
                f"Must be one of: {', '.join(repr(e) for e in _TELEMETRY_EXPORTERS)}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
