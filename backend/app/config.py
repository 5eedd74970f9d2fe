"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
Values are read once from the environment (and .env) and passed into the
components that need them at construction time.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./bullshark.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Strava ===
    strava_client_id: Optional[str] = Field(default=None)
    strava_client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("strava_client_secret", "strava_secret")
    )
    strava_club_id: Optional[str] = Field(default=None)
    strava_admin_id: str = Field(
        default="admin",
        description="Identity whose token is used for club requests"
    )

    # === Ingestion ===
    cron_secret: Optional[str] = Field(
        default=None,
        description="Shared secret for the manual populate trigger"
    )
    ingestion_enabled: bool = Field(default=True)
    ingestion_interval_seconds: int = Field(default=3600)

    # === Competition ===
    competition_start_date: date = Field(
        default=date(2025, 12, 15),
        description="First day of the challenge (reference timezone midnight)"
    )
    reference_timezone: str = Field(
        default="America/Los_Angeles",
        description="Timezone used for week and month boundaries"
    )

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('reference_timezone')
    @classmethod
    def check_timezone(cls, v: str) -> str:
        """Reject unknown IANA timezone names early."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def strava_configured(self) -> bool:
        return bool(
            self.strava_client_id
            and self.strava_client_secret
            and self.strava_club_id
        )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@dataclass(frozen=True)
class StravaConfig:
    """Strava credentials and club, injected into OAuth and club clients."""

    client_id: str
    client_secret: str
    club_id: str
    admin_id: str = "admin"

    @classmethod
    def from_settings(cls, s: Settings) -> "StravaConfig":
        return cls(
            client_id=s.strava_client_id or "",
            client_secret=s.strava_client_secret or "",
            club_id=s.strava_club_id or "",
            admin_id=s.strava_admin_id,
        )


# Global settings instance
settings = Settings()
