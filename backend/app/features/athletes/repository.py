"""
Athlete repository.

Roster is seeded out of band (scripts/seed_athletes.py) and only read by
the API and the team stats aggregation.
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.repository import BaseRepository
from .models import Athlete

logger = logging.getLogger(__name__)


class AthleteRepository(BaseRepository[Athlete]):
    """Repository for the athlete roster."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Athlete)

    async def get_all_athletes(self) -> list[Athlete]:
        """Get the full roster ordered by name."""
        result = await self._execute(
            select(Athlete).order_by(Athlete.name),
            "fetch athletes",
        )
        return list(result.scalars().all())

    async def insert_athletes(self, rows: Sequence[dict]) -> int:
        """
        Insert roster entries; IDs already present are left untouched.

        Args:
            rows: Mappings with id, name, team and optional event

        Returns:
            Number of new athletes
        """
        inserted = await self.insert_ignore(rows)
        logger.info(f"Inserted {inserted} new of {len(rows)} athletes")
        return inserted
