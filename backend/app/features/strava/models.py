"""
Strava-related database models.

Models:
- StravaAuthToken: OAuth credential per identity (one "admin" in practice)
"""

from datetime import datetime

from sqlalchemy import Column, String, Integer, Text

from app.models.base import Base, UTCDateTime, utcnow
from app.shared.constants import TOKEN_REFRESH_MARGIN_SECONDS


class StravaAuthToken(Base):
    """
    Strava OAuth token storage.

    Keyed by identity, so the store holds at most one credential per user.
    Tokens should be encrypted in production.
    """

    __tablename__ = "strava_auth_tokens"

    id = Column(String(64), primary_key=True)

    # OAuth tokens (should be encrypted in production)
    token_type = Column(String(32), nullable=False, default="Bearer")
    access_token = Column(Text, nullable=False)
    refresh_token = Column(Text, nullable=False)
    expires_at = Column(Integer, nullable=False)  # Unix timestamp
    expires_in = Column(Integer, nullable=False, default=0)  # seconds at mint time

    # Timestamps
    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if access token is expired."""
        now = now or utcnow()
        return now.timestamp() >= self.expires_at

    def expires_soon(self, now: datetime | None = None) -> bool:
        """Check if access token expires within the refresh margin (5 min)."""
        now = now or utcnow()
        return self.expires_at - now.timestamp() < TOKEN_REFRESH_MARGIN_SECONDS

    def __repr__(self):
        return f"<StravaAuthToken id={self.id} expires_at={self.expires_at}>"
