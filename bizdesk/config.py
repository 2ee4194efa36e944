"""
Configuration management using Pydantic Settings.

Sources, lowest to highest priority:
1. Default values
2. .env file in the working directory
3. Environment variables (BIZDESK_*)
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .i18n import tr


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BIZDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase project
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None   # anon / publishable key

    # Account used by the CLI
    email: Optional[str] = None
    password: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def require_backend(self) -> None:
        """Raise ConfigurationError unless the Supabase URL and key are set"""
        missing = [
            f"BIZDESK_{name.upper()}"
            for name in ("supabase_url", "supabase_key")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(tr("common.missing_config", names=", ".join(missing)))

    def require_credentials(self) -> None:
        missing = [
            f"BIZDESK_{name.upper()}"
            for name in ("email", "password")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(tr("common.missing_config", names=", ".join(missing)))


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Re-read environment and .env"""
    global _settings
    _settings = Settings()
    return _settings
