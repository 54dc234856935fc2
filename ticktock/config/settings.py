"""
Configuration management for ticktock.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TicktockConfig(BaseSettings):
    """Configuration settings for the ticktock application."""

    # Session configuration
    secret_key: str = Field(default="ticktock-dev-secret", alias="SECRET_KEY")
    session_cookie: str = Field(default="ticktock_session", alias="SESSION_COOKIE")
    session_max_age: int = Field(
        default=30 * 24 * 60 * 60, alias="SESSION_MAX_AGE"
    )  # 30 days

    # Demo identity provider
    demo_user_email: str = Field(default="test@example.com", alias="DEMO_USER_EMAIL")
    demo_user_password: str = Field(default="password123", alias="DEMO_USER_PASSWORD")
    demo_user_name: str = Field(default="Test User", alias="DEMO_USER_NAME")

    # Timesheet configuration
    completed_hours_threshold: float = Field(
        default=40.0, alias="COMPLETED_HOURS_THRESHOLD"
    )
    baseline_file: Optional[str] = Field(default=None, alias="BASELINE_FILE")

    # Server configuration
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("completed_hours_threshold")
    @classmethod
    def validate_threshold(cls, v):
        """Ensure the completion threshold is positive."""
        if v <= 0:
            raise ValueError("Completed hours threshold must be positive")
        return v

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v):
        """Ensure a session signing key is present."""
        if not v or not v.strip():
            raise ValueError("Secret key cannot be empty")
        return v


def load_config(env_file: Optional[str] = None) -> TicktockConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return TicktockConfig()


# Global configuration instance
_config: Optional[TicktockConfig] = None


def get_config() -> TicktockConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> TicktockConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
