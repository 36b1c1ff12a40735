"""
Centralized configuration for the HRMIS portal client.

All settings are loaded from environment variables with sensible defaults.
Supabase settings share the SUPABASE_* namespace with the web client.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Remote record store
    profiles_table: str = "profiles"
    avatars_bucket: str = "avatars"

    # Redirect targets handed to the auth provider
    site_url: str = "http://localhost:5173"
    base_path: str = ""  # e.g. "/hrmis-web-beta" when deployed under a sub-path

    # Local session persistence
    session_file: Path = Path.home() / ".hrmis" / "session.json"

    # Password policy (matches the Supabase project default)
    min_password_length: int = 6

    def url_for(self, path: str) -> str:
        """Build an absolute URL for a client route."""
        return f"{self.site_url.rstrip('/')}{self.base_path}{path}"

    @property
    def login_path(self) -> str:
        return f"{self.base_path}/login"

    @property
    def auth_callback_url(self) -> str:
        return self.url_for("/auth/callback")

    @property
    def password_reset_url(self) -> str:
        return self.url_for("/reset-password")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
