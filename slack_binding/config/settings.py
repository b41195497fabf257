"""
Centralized configuration management using Pydantic Settings.
Validates environment variables on startup and provides typed config access.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings with validation.
    Loads from environment variables with fallback to .env file.
    """

    # Slack Web API
    slack_base_url: str = Field(
        default="https://slack.com/api",
        description="Base URL of the Slack Web API"
    )

    # Integration manager values (Optional) - consulted before the local store
    slack_api_key: Optional[str] = None
    slack_channel: Optional[str] = None

    # Local configuration store
    config_store_path: str = Field(
        default="~/.slack_integration_config.json",
        description="JSON file backing the local configuration store"
    )
    config_store_enabled: bool = True

    # HTTP client
    http_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Environment
    environment: str = "development"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format is supported."""
        valid_formats = ["json", "text"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    def is_production(self) -> bool:
        """Check if running in production"""
        return self.environment.lower() == "production"

    def has_integration_values(self) -> bool:
        """Check if the environment supplies any Slack setting"""
        return bool(self.slack_api_key or self.slack_channel)

    def validate_critical_config(self):
        """
        Validate critical configuration on startup.
        Raises ValueError if critical config is missing.
        """
        errors = []

        if not self.slack_base_url:
            errors.append("SLACK_BASE_URL must not be empty")

        if self.http_timeout_seconds <= 0:
            errors.append("HTTP_TIMEOUT_SECONDS must be positive")

        # Credentials may still arrive through the local store (non-critical)
        if not self.slack_api_key:
            import structlog
            logger = structlog.get_logger()
            logger.info(
                "slack_api_key_not_in_environment",
                message="SLACK_API_KEY not set - falling back to local configuration store"
            )

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")


# Global settings instance
settings = Settings()
