"""
Strava integration module.

Usage:
    from app.features.strava import TokenCache, StravaClubClient

Components:
- StravaOAuth: token refresh against Strava OAuth
- TokenCache: in-memory credential cache with expiry-aware refresh
- StravaClubClient: club activities feed

Models:
- StravaAuthToken: OAuth credential storage
"""

from .models import StravaAuthToken
from .schemas import ClubActivity, ClubAthlete, StravaTokenResponse
from .oauth import StravaOAuth
from .token_cache import TokenCache
from .client import StravaClubClient
from .repository import StravaTokenRepository

__all__ = [
    # Models
    "StravaAuthToken",
    # Schemas
    "ClubActivity",
    "ClubAthlete",
    "StravaTokenResponse",
    # OAuth / tokens
    "StravaOAuth",
    "TokenCache",
    # Client
    "StravaClubClient",
    # Repositories
    "StravaTokenRepository",
]
