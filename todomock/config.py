"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), one instance per process
    - Every setting has a default: the mock backend works with no environment at all

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Simulated storage latency, applied once per Store operation
    latency_ms: int = 200

    # Interception boundary
    intercept_host: str = "api.todos.com"
    path_prefix: str = "/api/v1"

    @field_validator("path_prefix", mode="before")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """'api/v1/' and '/api/v1' both become '/api/v1'."""
        if isinstance(v, str):
            v = v.strip().strip("/")
            return f"/{v}" if v else ""
        return v

    # Fixture data
    seed_on_startup: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
