"""Application configuration using Pydantic BaseSettings."""

import logging
import sys

import structlog
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file="../.env", env_file_encoding="utf-8", extra="ignore")

    # MongoDB Configuration
    mongodb_url: str = Field(default="", alias="MONGODB_URL")
    mongodb_database: str = Field(default="formattr", alias="MONGODB_DATABASE")
    attributes_collection: str = Field(default="attributes", alias="ATTRIBUTES_COLLECTION")
    mongodb_max_pool_size: int = Field(default=100, alias="MONGODB_MAX_POOL_SIZE")
    mongodb_timeout_ms: int = Field(default=5000, alias="MONGODB_TIMEOUT_MS")

    # Application Environment
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")

    # GraphQL
    graphiql_enabled: bool = Field(default=True, alias="GRAPHIQL_ENABLED")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @model_validator(mode="after")
    def validate_required_config(self) -> "Settings":
        """Validate required configuration on startup.

        Fails fast with clear error messages if configuration is incomplete.
        Validation is skipped in test environments.
        """
        if self.app_env in ("test", "testing"):
            return self

        missing = []

        if not self.mongodb_url:
            missing.append("MONGODB_URL: Connection string, e.g. mongodb://localhost:27017")

        if missing:
            error_msg = "CRITICAL: Missing required environment variables:\n\n" + "\n".join(
                f"  - {m}" for m in missing
            )
            error_msg += "\n\nThe application cannot start without these variables."
            error_msg += "\nPlease update your .env file and restart."
            raise ValueError(error_msg)

        return self


def configure_logging(settings: Settings) -> None:
    """Configure structlog based on application environment.

    - Production: JSON output for log aggregation
    - Development: Console output for human readability

    Events below LOG_LEVEL are dropped. Logs go to stderr so stdout stays
    free for CLI results.
    """
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    if settings.app_env == "production":
        renderer_processors = [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer_processors = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *renderer_processors,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
