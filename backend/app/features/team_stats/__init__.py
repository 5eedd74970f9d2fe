"""
Team stats module.

Usage:
    from app.features.team_stats import TeamStatsService

Components:
- calendar: reference-timezone week/month windows
- TeamStatsService: per-team, per-athlete and per-week rollups
"""

from .schemas import WeekData, TeamData, TeamStats
from .service import TeamStatsService

__all__ = [
    "WeekData",
    "TeamData",
    "TeamStats",
    "TeamStatsService",
]
