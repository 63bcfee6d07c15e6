"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError

DEFAULT_API_BASE = "https://api.ynab.com/v1"
LAST_USED_BUDGET = "last-used"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # YNAB
    ynab_access_token: Optional[str] = Field(default=None, alias="YNAB_ACCESS_TOKEN")
    ynab_account_id: Optional[str] = Field(default=None, alias="YNAB_ACCOUNT_ID")
    ynab_budget_id: str = Field(default=LAST_USED_BUDGET, alias="YNAB_BUDGET_ID")
    ynab_api_base: str = Field(default=DEFAULT_API_BASE, alias="YNAB_API_BASE")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper

    @field_validator("ynab_budget_id", mode="before")
    @classmethod
    def default_budget_id(cls, v):
        """Fall back to the last-used budget when the variable is blank."""
        if v is None or not str(v).strip():
            return LAST_USED_BUDGET
        return str(v).strip()

    @field_validator("ynab_api_base")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Keep the base URL joinable with path segments."""
        return v.rstrip("/")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None


def require_credentials(settings: Settings) -> None:
    """
    Ensure the settings needed to build and submit transactions are present.

    Args:
        settings: Loaded settings

    Raises:
        ConfigurationError: If the access token or account id is missing
    """
    if not settings.ynab_access_token:
        raise ConfigurationError(
            "YNAB_ACCESS_TOKEN not found in environment or .env file",
            details={"required_key": "YNAB_ACCESS_TOKEN"}
        )
    if not settings.ynab_account_id:
        raise ConfigurationError(
            "YNAB_ACCOUNT_ID not found in environment or .env file",
            details={"required_key": "YNAB_ACCOUNT_ID"}
        )
