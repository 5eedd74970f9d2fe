"""
Unified constants for teams, sport types and Strava limits.

Single source of truth for the names used across ingestion and stats.
"""

from enum import Enum


class Team(str, Enum):
    """
    Competition teams.

    Roster entries carry one of these values in their `team` column.
    """
    BULLS = "bulls"
    SHARKS = "sharks"


class StravaSportType(str, Enum):
    """
    Sport types from Strava API.

    These are Strava's naming conventions, not ours.
    Only RUN counts toward team totals.
    """
    RUN = "Run"
    TRAIL_RUN = "TrailRun"
    RIDE = "Ride"
    WALK = "Walk"
    HIKE = "Hike"


# Sport type that counts toward the competition
COUNTED_SPORT_TYPE: str = StravaSportType.RUN.value

# Club activities page size (Strava max is 200)
CLUB_ACTIVITIES_PER_PAGE = 100

# Refresh the token when it expires within this many seconds
TOKEN_REFRESH_MARGIN_SECONDS = 300

# Separator used when building the activity identity string
ACTIVITY_HASH_SEPARATOR = "|"

# Placeholder for a missing first/last name in display names
UNKNOWN_NAME = "Unknown"

METERS_PER_KILOMETER = 1000.0
