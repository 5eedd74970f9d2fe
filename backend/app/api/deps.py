"""
Shared FastAPI dependencies.

Long-lived components (token cache, club client) are built once in the
application lifespan and stored on `app.state`; request-scoped services
are assembled here from them and a per-request session.
"""

import logging
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, settings
from app.db.session import get_async_db
from app.features.activities import ActivityIngestionService
from app.features.strava import StravaClubClient
from app.features.team_stats import TeamStatsService
from app.shared.errors import ExternalAPIError, UnauthorizedError

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return settings


def get_reference_tz(s: Settings = Depends(get_settings)) -> ZoneInfo:
    return ZoneInfo(s.reference_timezone)


def get_club_client(request: Request) -> StravaClubClient:
    club_client = getattr(request.app.state, "club_client", None)
    if club_client is None:
        raise ExternalAPIError("Strava is not configured")
    return club_client


def get_ingestion_service(
    db: AsyncSession = Depends(get_async_db),
    club_client: StravaClubClient = Depends(get_club_client),
) -> ActivityIngestionService:
    return ActivityIngestionService(db, club_client)


def get_team_stats_service(
    db: AsyncSession = Depends(get_async_db),
    s: Settings = Depends(get_settings),
    tz: ZoneInfo = Depends(get_reference_tz),
) -> TeamStatsService:
    return TeamStatsService(db, s.competition_start_date, tz)


async def verify_cron_token(
    x_cloudscheduler_token: Optional[str] = Header(None, alias="X-CloudScheduler-Token"),
    s: Settings = Depends(get_settings),
) -> None:
    """
    Shared-secret check for the manual ingestion trigger.

    Open when no secret is configured.
    """
    if not s.cron_secret:
        return
    if x_cloudscheduler_token != s.cron_secret:
        logger.warning("Rejected populate request with missing or invalid scheduler token")
        raise UnauthorizedError("Invalid or missing scheduler token")
