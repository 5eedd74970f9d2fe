"""
Activity endpoints.

Endpoints:
- GET  /activities            - All stored activities
- GET  /activities/week       - This week (reference timezone)
- GET  /activities/month      - This month (reference timezone)
- GET  /activities/window     - Custom RFC 3339 window
- POST /activities/populate   - Run one ingestion (scheduler trigger)
"""

import logging
from typing import Sequence
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_ingestion_service, get_reference_tz, verify_cron_token
from app.db.session import get_async_db
from app.features.activities import (
    ActivityIngestionService,
    ActivityRecord,
    ActivityRepository,
    BullSharkActivity,
    PopulateResponse,
)
from app.features.team_stats.calendar import parse_rfc3339, this_month_window, this_week_window

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/activities", tags=["Activities"])


def _to_records(activities: Sequence[BullSharkActivity], tz: ZoneInfo) -> list[ActivityRecord]:
    """Serialize with timestamps in the reference timezone."""
    records = []
    for activity in activities:
        record = ActivityRecord.model_validate(activity)
        records.append(record.model_copy(update={"date": record.date.astimezone(tz)}))
    return records


@router.get("", response_model=list[ActivityRecord])
async def get_all_activities(
    db: AsyncSession = Depends(get_async_db),
    tz: ZoneInfo = Depends(get_reference_tz),
):
    """All stored activities, newest first."""
    activities = await ActivityRepository(db).get_all_activities()
    return _to_records(activities, tz)


@router.get("/week", response_model=list[ActivityRecord])
async def get_activities_from_this_week(
    db: AsyncSession = Depends(get_async_db),
    tz: ZoneInfo = Depends(get_reference_tz),
):
    """Activities observed Monday 00:00 through Sunday 23:59:59 this week."""
    start, end = this_week_window(tz)
    logger.info(f"Querying this week's activities from {start} to {end}")
    activities = await ActivityRepository(db).get_activities_in_window(start, end)
    return _to_records(activities, tz)


@router.get("/month", response_model=list[ActivityRecord])
async def get_activities_from_this_month(
    db: AsyncSession = Depends(get_async_db),
    tz: ZoneInfo = Depends(get_reference_tz),
):
    """Activities observed during the current calendar month."""
    start, end = this_month_window(tz)
    logger.info(f"Querying this month's activities from {start} to {end}")
    activities = await ActivityRepository(db).get_activities_in_window(start, end)
    return _to_records(activities, tz)


@router.get("/window", response_model=list[ActivityRecord])
async def get_activities_from_custom_window(
    start: str = Query(..., description="RFC 3339 start, e.g. 2024-01-01T00:00:00Z"),
    end: str = Query(..., description="RFC 3339 end, e.g. 2024-01-31T23:59:59Z"),
    db: AsyncSession = Depends(get_async_db),
    tz: ZoneInfo = Depends(get_reference_tz),
):
    """Activities observed within [start, end]."""
    start_at = parse_rfc3339(start, "start")
    end_at = parse_rfc3339(end, "end")
    logger.info(f"Querying activities from {start_at} to {end_at}")
    activities = await ActivityRepository(db).get_activities_in_window(start_at, end_at)
    return _to_records(activities, tz)


@router.post(
    "/populate",
    response_model=PopulateResponse,
    dependencies=[Depends(verify_cron_token)],
)
async def populate_new_activities(
    service: ActivityIngestionService = Depends(get_ingestion_service),
):
    """Fetch the latest club activities and store the new ones."""
    return await service.populate_new_activities()
