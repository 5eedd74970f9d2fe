"""
Activity ingestion.

One fetch-convert-persist cycle:
1. Fetch the 100 most recent club activities (valid token via TokenCache)
2. Convert every record; one bad record rejects the whole batch
3. Insert the batch in one statement, skipping IDs already stored

Overlapping pages are expected (the job runs hourly), and the conflict skip
makes re-ingestion a no-op. Failures propagate to the caller; the next
scheduled tick is the retry.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.features.strava.client import StravaClubClient
from .conversion import convert_activities
from .repository import ActivityRepository
from .schemas import PopulateResponse

logger = logging.getLogger(__name__)


class ActivityIngestionService:
    """
    Ingestion pipeline for club activities.

    Usage:
        service = ActivityIngestionService(db, club_client)
        result = await service.populate_new_activities()
    """

    def __init__(self, db: AsyncSession, club_client: StravaClubClient):
        self.db = db
        self.club_client = club_client
        self.activities = ActivityRepository(db)

    async def populate_new_activities(
        self,
        observed_at: Optional[datetime] = None
    ) -> PopulateResponse:
        """
        Run one ingestion cycle.

        Args:
            observed_at: Batch timestamp override (defaults to now, UTC)

        Returns:
            Counts of fetched and newly inserted activities

        Raises:
            NoCredentialError, ExternalAPIError: fetch failed
            ConversionError: a record could not be identified (nothing stored)
            DatabaseError: insert failed
        """
        logger.info("Populating new activities...")
        club_activities = await self.club_client.get_recent_activities()
        logger.info(f"Found {len(club_activities)} activities in club feed")

        records = convert_activities(club_activities, observed_at)

        inserted = await self.activities.insert_activities(records)
        await self.db.commit()

        logger.info(f"Populate new activities complete: {inserted} new")
        return PopulateResponse(
            status="success",
            fetched=len(club_activities),
            inserted=inserted,
        )
