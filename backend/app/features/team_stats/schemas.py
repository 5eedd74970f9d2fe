"""
Team stats schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WeekData(CamelModel):
    """One competition week for one team."""

    week_start: datetime  # Monday 00:00, reference timezone offset
    weekly_team_kilometers: float = 0.0
    weekly_running_sum: float = 0.0
    weekly_athlete_kilometers: dict[str, float] = Field(default_factory=dict)


class TeamData(CamelModel):
    athlete_kilometers: dict[str, float] = Field(default_factory=dict)
    weekly_kilometers: list[WeekData] = Field(default_factory=list)


class TeamStats(CamelModel):
    bulls: TeamData
    sharks: TeamData
