"""
Configuration module for the News Relay service.

This module provides the Settings class that loads and validates environment
variables once at process start. It uses Pydantic BaseSettings for type validation
and default value handling; the resulting object is frozen and handed explicitly
to the components that need it.
"""

from __future__ import annotations

import sys
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The upstream API key lives here and only here; it is never accepted from
    a client request.
    """

    # Server Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the HTTP server listens on"
    )

    # Upstream NewsAPI Configuration
    news_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("news_api_key", "NEWS_API_KEY", "NewsAPI"),
        repr=False,
        description="API key injected into every upstream request"
    )
    top_headlines_url: str = Field(
        default="https://newsapi.org/v2/top-headlines",
        description="Upstream endpoint returning current headlines"
    )
    everything_url: str = Field(
        default="https://newsapi.org/v2/everything",
        description="Upstream full-text search endpoint"
    )
    upstream_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        le=120.0,
        description="Timeout (in seconds) applied to each upstream request"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console output"
    )

    # CORS Configuration
    cors_allow_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed origins ('*' allows any origin)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Parse cors_allow_origins into a list of allowed CORS origins."""
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    @property
    def has_news_api_key(self) -> bool:
        """Check if the upstream API key is available."""
        return bool(self.news_api_key)


def get_settings() -> Settings:
    """
    Build the application settings instance.

    Returns:
        Settings: Validated application settings

    Raises:
        ValidationError: If environment variables are invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        print(f"Configuration validation error: {e}", file=sys.stderr)
        raise


def validate_env_cli() -> None:
    """
    CLI command to validate environment configuration.

    This function can be called via: python -m news_relay.app.core.config --check
    """
    try:
        settings = get_settings()
        print("✅ Environment configuration is valid")
        print(f"Listening on: {settings.host}:{settings.port}")
        print(f"Top headlines URL: {settings.top_headlines_url}")
        print(f"Everything URL: {settings.everything_url}")
        print(f"Upstream timeout: {settings.upstream_timeout_seconds} seconds")
        print(f"NewsAPI key: {'✅ Set' if settings.has_news_api_key else '❌ Not set'}")
        print(f"Log level: {settings.log_level}")
    except ValidationError as e:
        print("❌ Environment configuration is invalid:")
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            print(f"  - {field}: {error['msg']}")
        sys.exit(1)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Configuration validation utility")
    parser.add_argument("--check", action="store_true", help="Validate environment configuration")

    args = parser.parse_args()

    if args.check:
        validate_env_cli()
    else:
        parser.print_help()
