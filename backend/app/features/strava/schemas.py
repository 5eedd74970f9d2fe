"""
Strava wire schemas.

Pydantic models for the payloads Strava returns. Unknown fields are
ignored; every club activity field is optional because Strava omits
fields freely.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClubAthlete(BaseModel):
    """Athlete summary embedded in a club activity."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resource_state: Optional[int] = None
    first_name: Optional[str] = Field(default=None, alias="firstname")
    last_name: Optional[str] = Field(default=None, alias="lastname")


class ClubActivity(BaseModel):
    """One record of GET /clubs/{id}/activities."""

    model_config = ConfigDict(extra="ignore")

    resource_state: Optional[int] = None
    athlete: Optional[ClubAthlete] = None
    name: Optional[str] = None
    distance: Optional[float] = None
    moving_time: Optional[int] = None
    elapsed_time: Optional[int] = None
    total_elevation_gain: Optional[float] = None
    sport_type: Optional[str] = None
    workout_type: Optional[int] = None
    device_name: Optional[str] = None


class StravaTokenResponse(BaseModel):
    """Response of POST /oauth/token (refresh_token grant)."""

    model_config = ConfigDict(extra="ignore")

    token_type: str
    access_token: str
    expires_at: int
    expires_in: int
    refresh_token: str
