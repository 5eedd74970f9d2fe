"""
Activity repository.

Data access layer for stored club activities.
"""

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.repository import BaseRepository
from .models import BullSharkActivity
from .schemas import ActivityRecord

logger = logging.getLogger(__name__)


class ActivityRepository(BaseRepository[BullSharkActivity]):
    """Repository for club activities, keyed by content hash."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, BullSharkActivity)

    async def insert_activities(self, records: Sequence[ActivityRecord]) -> int:
        """
        Insert a batch in one statement; existing IDs are skipped.

        Args:
            records: Converted activity records

        Returns:
            Number of new rows
        """
        if not records:
            logger.info("insert_activities received an empty batch, skipping")
            return 0

        inserted = await self.insert_ignore([record.model_dump() for record in records])
        logger.info(
            f"Batch insert complete. Inserted {inserted} new of {len(records)} activities."
        )
        return inserted

    async def get_all_activities(self) -> list[BullSharkActivity]:
        """
        Get every stored activity.

        Returns:
            Activities ordered by date (newest first)
        """
        result = await self._execute(
            select(BullSharkActivity).order_by(desc(BullSharkActivity.date)),
            "fetch activities",
        )
        return list(result.scalars().all())

    async def get_activities_in_window(
        self,
        start: datetime,
        end: datetime
    ) -> list[BullSharkActivity]:
        """
        Get activities observed within [start, end] (both inclusive).

        Args:
            start: Window start (aware)
            end: Window end (aware)

        Returns:
            Activities ordered by date (newest first)
        """
        logger.debug(f"Querying activities between {start} and {end}")
        result = await self._execute(
            select(BullSharkActivity)
            .where(BullSharkActivity.date >= start)
            .where(BullSharkActivity.date <= end)
            .order_by(desc(BullSharkActivity.date)),
            "fetch activities from window",
        )
        return list(result.scalars().all())
