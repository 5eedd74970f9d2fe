"""
Activity schemas.

Pydantic models for activity records.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActivityRecord(BaseModel):
    """
    Internal activity record.

    Produced by conversion, persisted as BullSharkActivity, and returned
    by the activity read endpoints.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    date: datetime
    athlete_name: Optional[str] = None
    resource_state: Optional[int] = None
    name: Optional[str] = None
    distance: Optional[float] = None
    moving_time: Optional[int] = None
    elapsed_time: Optional[int] = None
    total_elevation_gain: Optional[float] = None
    sport_type: Optional[str] = None
    workout_type: Optional[int] = None
    device_name: Optional[str] = None


class PopulateResponse(BaseModel):
    """Result of one ingestion run."""

    status: str
    fetched: int
    inserted: int
