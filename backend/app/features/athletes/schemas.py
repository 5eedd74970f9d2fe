"""
Athlete schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AthleteResponse(BaseModel):
    """Roster entry as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    team: str
    event: Optional[str] = None
