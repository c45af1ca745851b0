from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from room_tracker.utils.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",  # .env files are shared with the front-end build
    )

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "json"

    # Database (Supabase); VITE_* names are what the front-end .env uses
    supabase_url: str | None = Field(
        None, validation_alias=AliasChoices("supabase_url", "vite_supabase_url")
    )
    supabase_anon_key: str | None = Field(
        None,
        validation_alias=AliasChoices(
            "supabase_anon_key",
            "vite_supabase_anon_key",
            "vite_supabase_supabase_anon_key",
        ),
    )
    supabase_service_role_key: str | None = None

    # Importer
    checklist_path: str = "README.md"

    # Application
    app_name: str = "Room Tracker"
    app_version: str = "1.0.0"

    # CORS - handle both string and list formats
    cors_origins: str | list[str] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("supabase_url", "supabase_anon_key", "supabase_service_role_key", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def get_import_credentials(settings: Settings | None = None) -> tuple[str, str]:
    """Return the (url, key) pair the importer writes with.

    The service-role key is preferred since the wipe has to bypass row-level
    security; the anon key is accepted for projects with permissive policies.
    """
    settings = settings or get_settings()
    key = settings.supabase_service_role_key or settings.supabase_anon_key
    if not settings.supabase_url or not key:
        missing = []
        if not settings.supabase_url:
            missing.append("SUPABASE_URL")
        if not key:
            missing.append("SUPABASE_SERVICE_ROLE_KEY or SUPABASE_ANON_KEY")
        raise ConfigurationError(
            "Missing Supabase credentials",
            details={"missing": missing},
        )
    return settings.supabase_url, key
