"""
Shared fixtures: in-memory database and record factories.
"""

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.session import init_db
from app.features.activities.models import BullSharkActivity
from app.features.strava.schemas import ClubActivity, ClubAthlete


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory SQLite database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_club_activity():
    """Build a club activity as Strava returns it."""

    def _make(
        first="Jane",
        last="Doe",
        distance=5000.0,
        moving_time=1500,
        elapsed_time=1600,
        sport_type="Run",
        **extra,
    ) -> ClubActivity:
        return ClubActivity(
            resource_state=2,
            athlete=ClubAthlete(resource_state=2, firstname=first, lastname=last),
            name=extra.pop("name", "Morning Run"),
            distance=distance,
            moving_time=moving_time,
            elapsed_time=elapsed_time,
            total_elevation_gain=extra.pop("total_elevation_gain", 12.0),
            sport_type=sport_type,
            workout_type=extra.pop("workout_type", None),
            device_name=extra.pop("device_name", None),
        )

    return _make


@pytest.fixture
def make_stored_activity():
    """Build a stored activity row."""
    counter = {"n": 0}

    def _make(
        athlete_name="Jane Doe",
        distance=5000.0,
        date=datetime(2026, 1, 7, 18, 0, tzinfo=timezone.utc),
        sport_type="Run",
        id=None,
    ) -> BullSharkActivity:
        counter["n"] += 1
        return BullSharkActivity(
            id=id or f"activity-{counter['n']:04d}",
            date=date,
            athlete_name=athlete_name,
            distance=distance,
            moving_time=1500,
            elapsed_time=1600,
            sport_type=sport_type,
        )

    return _make
