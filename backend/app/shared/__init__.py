"""
Shared building blocks (NOT business logic).

Usage:
    from app.shared import BaseRepository, Team
    from app.shared.errors import ExternalAPIError
"""
from .constants import (
    Team,
    StravaSportType,
    COUNTED_SPORT_TYPE,
    CLUB_ACTIVITIES_PER_PAGE,
    TOKEN_REFRESH_MARGIN_SECONDS,
)
from .errors import (
    BullSharkError,
    NoCredentialError,
    ExternalAPIError,
    ConversionError,
    InternalConversionError,
    UnauthorizedError,
    DatabaseError,
    BadRequestError,
)
from .repository import BaseRepository

__all__ = [
    # Constants
    "Team",
    "StravaSportType",
    "COUNTED_SPORT_TYPE",
    "CLUB_ACTIVITIES_PER_PAGE",
    "TOKEN_REFRESH_MARGIN_SECONDS",
    # Errors
    "BullSharkError",
    "NoCredentialError",
    "ExternalAPIError",
    "ConversionError",
    "InternalConversionError",
    "UnauthorizedError",
    "DatabaseError",
    "BadRequestError",
    # Repository
    "BaseRepository",
]
