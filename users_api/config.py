"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - SUPABASE_URL and SUPABASE_KEY are required: missing or blank fails at startup
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
      (ADR: developer UX)
    - Defaults provided for all non-secret settings
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Route prefixes the user router is mounted under
USER_PREFIXES: tuple[str, ...] = ("/usuarios", "/api/usuarios")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Managed database
    supabase_url: str
    supabase_key: str
    users_table: str = "users"

    @field_validator("supabase_url", "supabase_key")
    @classmethod
    def require_non_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must be set (SUPABASE_URL and SUPABASE_KEY are required)")
        return v

    # API
    cors_origins: list[str] = ["*"]
    expose_error_details: bool = False

    # Server (python -m users_api)
    host: str = "0.0.0.0"
    port: int = 3000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
