"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="NutriDesk", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/nutridesk",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="NutriDesk API", description="API documentation title"
    )
    api_description: str = Field(
        default="Dietician client engagement: subscriptions, diet readiness and follow-ups",
        description="API documentation description",
    )

    # Calendar handling
    canonical_timezone: str = Field(
        default="UTC",
        description="Timezone whose midnight defines a calendar day for all stored dates",
    )

    # Follow-up scheduling
    follow_up_count: int = Field(
        default=6, ge=1, description="Number of follow-ups generated per program start"
    )
    follow_up_interval_months: int = Field(
        default=1, ge=1, description="Months between generated follow-ups"
    )
    follow_up_default_timing: str = Field(
        default="11:00 am", description="Time of day given to generated follow-ups"
    )
    follow_up_default_category: str = Field(
        default="Diet", description="Category given to generated follow-ups"
    )

    # Dashboard
    new_client_window_days: int = Field(
        default=7, ge=1, description="Clients created within this many days count as new"
    )
    diet_pending_limit: int = Field(
        default=10, ge=1, description="Max entries in the dashboard diet-pending list"
    )
    diet_window_days_back: int = Field(
        default=7, ge=0, description="Days before today covered by the batch diet query"
    )
    diet_window_days_forward: int = Field(
        default=14, ge=2, description="Days after today covered by the batch diet query"
    )

    # Subscription ledger
    ledger_max_retries: int = Field(
        default=3, ge=1, description="Attempts for a ledger write that loses a version race"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("canonical_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()
