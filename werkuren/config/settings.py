"""
Configuration management for the werkuren calculator.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from werkuren.utils.number_format import SUPPORTED_LOCALES

DEFAULT_SETTINGS_FILE = str(Path.home() / ".werkuren" / "settings.json")


class WerkurenConfig(BaseSettings):
    """Configuration settings for the werkuren calculator."""

    # Storage Configuration
    settings_file: str = Field(default=DEFAULT_SETTINGS_FILE, alias="SETTINGS_FILE")

    # Display Configuration
    currency: str = Field(default="EUR", alias="CURRENCY")
    locale: str = Field(default="nl_BE", alias="LOCALE")
    hours_precision: int = Field(default=2, ge=0, le=6, alias="HOURS_PRECISION")
    distance_precision: int = Field(default=1, ge=0, le=6, alias="DISTANCE_PRECISION")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")
    log_format: str = Field(default="standard", alias="LOG_FORMAT")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
    )

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        """Ensure currency is a three-letter ISO 4217 code."""
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"Currency must be a three-letter code, got '{v}'")
        return code

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v):
        """Ensure locale is one the formatters know about."""
        normalized = v.strip().replace("-", "_")
        if normalized not in SUPPORTED_LOCALES:
            raise ValueError(
                f"Locale must be one of: {sorted(SUPPORTED_LOCALES)}"
            )
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is one configure_logging supports."""
        valid_formats = ["standard", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("log_file")
    @classmethod
    def validate_log_file(cls, v):
        """Treat an empty LOG_FILE as no file logging."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @property
    def settings_path(self) -> Path:
        """Settings file location with ``~`` expanded."""
        return Path(self.settings_file).expanduser()


def load_config(env_file: Optional[str] = None) -> WerkurenConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return WerkurenConfig()


# Global configuration instance
_config: Optional[WerkurenConfig] = None


def get_config() -> WerkurenConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> WerkurenConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
