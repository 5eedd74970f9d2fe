"""
Background ingestion runner.

Invokes the ingestion pipeline on a fixed interval. A failed tick is
logged and the runner waits for the next one; there is no inline retry.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.features.strava.client import StravaClubClient
from app.shared.errors import BullSharkError
from .service import ActivityIngestionService

logger = logging.getLogger(__name__)


class BackgroundIngestionRunner:
    """
    Periodic task runner for activity ingestion.

    Call `start()` to begin ingesting on a timer.
    Call `stop()` to gracefully stop.

    Usage:
        runner = BackgroundIngestionRunner(interval_seconds=3600)
        await runner.start(AsyncSessionLocal, club_client)
        # ... later ...
        await runner.stop()
    """

    def __init__(self, interval_seconds: float = 3600):
        self.interval_seconds = interval_seconds
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self._db_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._club_client: Optional[StravaClubClient] = None
        self.last_error: Optional[str] = None

    @property
    def running(self) -> bool:
        return self._running

    def status(self) -> str:
        """Runner state as reported by /health."""
        if not self._running:
            return "stopped"
        if self.last_error:
            return f"unhealthy: {self.last_error}"
        return "healthy"

    async def start(
        self,
        db_factory: async_sessionmaker[AsyncSession],
        club_client: StravaClubClient,
    ):
        """Start the ingestion loop."""
        if self._running:
            return

        self._running = True
        self._db_factory = db_factory
        self._club_client = club_client
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Background ingestion started (every {self.interval_seconds}s)")

    async def stop(self):
        """Stop the ingestion loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Background ingestion stopped")

    async def _run_loop(self):
        """Main loop: one ingestion per tick."""
        while self._running:
            await self.run_once()
            await asyncio.sleep(self.interval_seconds)

    async def run_once(self) -> bool:
        """
        Run a single ingestion, logging instead of raising.

        Returns:
            True if the tick succeeded
        """
        try:
            async with self._db_factory() as db:
                service = ActivityIngestionService(db, self._club_client)
                result = await service.populate_new_activities()
            self.last_error = None
            logger.info(f"Scheduled ingestion result: {result}")
            return True
        except BullSharkError as e:
            self.last_error = f"{e.kind}: {e.message}"
            logger.error(f"Failed to populate new activities: {self.last_error}")
        except Exception as e:
            self.last_error = str(e)
            logger.exception(f"Unexpected ingestion error: {e}")
        return False


# Global instance
background_ingestion = BackgroundIngestionRunner(
    interval_seconds=settings.ingestion_interval_seconds
)
