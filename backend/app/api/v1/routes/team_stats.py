"""
Team stats endpoint.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_team_stats_service
from app.features.team_stats import TeamStats, TeamStatsService

router = APIRouter(prefix="/team-stats", tags=["Team Stats"])


@router.get("", response_model=TeamStats)
async def get_team_stats(
    service: TeamStatsService = Depends(get_team_stats_service),
):
    """Per-team, per-athlete and per-week kilometers since the competition start."""
    return await service.get_team_stats()
