"""
Team stats aggregation.

Rolls stored activities up into per-team totals over the competition
window (competition start through now):

- per athlete: total kilometers
- per week: team kilometers, running total, per-athlete kilometers

Only runs by rostered athletes on a known team count. Anything else is
skipped, not treated as an error.
"""

import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from app.features.activities.models import BullSharkActivity
from app.features.activities.repository import ActivityRepository
from app.features.athletes.repository import AthleteRepository
from app.shared.constants import COUNTED_SPORT_TYPE, METERS_PER_KILOMETER, Team
from .calendar import competition_window, localize, start_of_week
from .schemas import TeamData, TeamStats, WeekData

logger = logging.getLogger(__name__)


class _TeamAccumulator:
    """Mutable per-team totals for one aggregation call."""

    def __init__(self):
        self.athlete_kilometers: dict[str, float] = {}
        self.weeks: dict[datetime, WeekData] = {}

    def add(self, athlete_name: str, week_key: datetime, week_start: datetime, km: float):
        self.athlete_kilometers[athlete_name] = (
            self.athlete_kilometers.get(athlete_name, 0.0) + km
        )

        week = self.weeks.get(week_key)
        if week is None:
            week = WeekData(week_start=week_start)
            self.weeks[week_key] = week
        week.weekly_team_kilometers += km
        week.weekly_athlete_kilometers[athlete_name] = (
            week.weekly_athlete_kilometers.get(athlete_name, 0.0) + km
        )

    def to_team_data(self) -> TeamData:
        """Order weeks ascending and fill in running sums."""
        running_sum = 0.0
        weekly: list[WeekData] = []
        for week_key in sorted(self.weeks):
            week = self.weeks[week_key]
            running_sum += week.weekly_team_kilometers
            week.weekly_running_sum = running_sum
            weekly.append(week)
        return TeamData(
            athlete_kilometers=self.athlete_kilometers,
            weekly_kilometers=weekly,
        )


class TeamStatsService:
    """
    Aggregation engine for the team challenge.

    Usage:
        service = TeamStatsService(db, settings.competition_start_date, tz)
        stats = await service.get_team_stats()
    """

    def __init__(self, db: AsyncSession, start_date: date, tz: ZoneInfo):
        self.db = db
        self.start_date = start_date
        self.tz = tz
        self.activities = ActivityRepository(db)
        self.athletes = AthleteRepository(db)

    async def build_athlete_team_map(self) -> dict[str, str]:
        """Roster as display name -> team."""
        roster = await self.athletes.get_all_athletes()
        return {athlete.name: athlete.team for athlete in roster}

    @staticmethod
    def counted_kilometers(
        activity: BullSharkActivity,
        athlete_teams: dict[str, str]
    ) -> Optional[tuple[str, str, float]]:
        """
        Team attribution for one activity.

        Returns:
            (athlete_name, team, km), or None if the activity does not count
        """
        if activity.sport_type != COUNTED_SPORT_TYPE:
            return None
        if activity.athlete_name is None:
            return None
        team = athlete_teams.get(activity.athlete_name)
        if team is None:
            return None
        if activity.distance is None:
            return None
        if team not in (Team.BULLS.value, Team.SHARKS.value):
            logger.warning(f"Unknown team '{team}' for {activity.athlete_name}, skipping")
            return None
        return activity.athlete_name, team, activity.distance / METERS_PER_KILOMETER

    async def get_team_stats(self, now: Optional[datetime] = None) -> TeamStats:
        """
        Aggregate the competition window.

        Args:
            now: Window end override (defaults to now, UTC)

        Raises:
            InternalConversionError: a week start has no single local instant
            DatabaseError: storage failure
        """
        start, end = competition_window(self.start_date, self.tz, now)
        athlete_teams = await self.build_athlete_team_map()
        activities = await self.activities.get_activities_in_window(start, end)
        logger.info(
            f"Aggregating {len(activities)} activities "
            f"({len(athlete_teams)} rostered athletes) from {start} to {end}"
        )

        teams = {
            Team.BULLS.value: _TeamAccumulator(),
            Team.SHARKS.value: _TeamAccumulator(),
        }
        skipped = 0
        for activity in activities:
            counted = self.counted_kilometers(activity, athlete_teams)
            if counted is None:
                skipped += 1
                continue
            athlete_name, team, km = counted

            week_key = start_of_week(activity.date, self.tz)
            teams[team].add(athlete_name, week_key, localize(week_key, self.tz), km)

        if skipped:
            logger.debug(f"Skipped {skipped} activities that do not count")

        return TeamStats(
            bulls=teams[Team.BULLS.value].to_team_data(),
            sharks=teams[Team.SHARKS.value].to_team_data(),
        )
