"""
Tests for the ingestion pipeline and the background runner.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from app.features.activities.background import BackgroundIngestionRunner
from app.features.activities.repository import ActivityRepository
from app.features.activities.service import ActivityIngestionService
from app.shared.errors import ConversionError, ExternalAPIError, NoCredentialError

OBSERVED_AT = datetime(2026, 1, 7, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def club_client():
    client = AsyncMock()
    client.get_recent_activities = AsyncMock(return_value=[])
    return client


@pytest.mark.asyncio
async def test_populate_inserts_new_activities(db, club_client, make_club_activity):
    club_client.get_recent_activities.return_value = [
        make_club_activity(),
        make_club_activity(first="Sam", last="Lee", distance=10000.0),
    ]
    service = ActivityIngestionService(db, club_client)

    result = await service.populate_new_activities(OBSERVED_AT)

    assert result.status == "success"
    assert result.fetched == 2
    assert result.inserted == 2
    assert await ActivityRepository(db).count() == 2


@pytest.mark.asyncio
async def test_overlapping_pages_are_idempotent(db, club_client, make_club_activity):
    page = [make_club_activity(), make_club_activity(first="Sam", last="Lee")]
    club_client.get_recent_activities.return_value = page
    service = ActivityIngestionService(db, club_client)
    await service.populate_new_activities(OBSERVED_AT)

    club_client.get_recent_activities.return_value = page + [
        make_club_activity(first="Ana", last="Ruiz", distance=7000.0)
    ]
    result = await service.populate_new_activities(OBSERVED_AT)

    assert result.fetched == 3
    assert result.inserted == 1
    assert await ActivityRepository(db).count() == 3


@pytest.mark.asyncio
async def test_missing_distance_stores_nothing(db, club_client, make_club_activity):
    club_client.get_recent_activities.return_value = [
        make_club_activity(),
        make_club_activity(first="Sam", last="Lee", distance=None),
    ]
    service = ActivityIngestionService(db, club_client)

    with pytest.raises(ConversionError):
        await service.populate_new_activities(OBSERVED_AT)

    assert await ActivityRepository(db).count() == 0


@pytest.mark.asyncio
async def test_fetch_failure_propagates(db, club_client):
    club_client.get_recent_activities.side_effect = ExternalAPIError("Strava down")
    service = ActivityIngestionService(db, club_client)

    with pytest.raises(ExternalAPIError):
        await service.populate_new_activities()


@pytest.mark.asyncio
async def test_empty_feed(db, club_client):
    result = await ActivityIngestionService(db, club_client).populate_new_activities()

    assert result.fetched == 0
    assert result.inserted == 0


# =============================================================================
# Background runner
# =============================================================================

@pytest.mark.asyncio
async def test_runner_tick_success(session_factory, club_client, make_club_activity):
    club_client.get_recent_activities.return_value = [make_club_activity()]
    runner = BackgroundIngestionRunner(interval_seconds=3600)
    runner._db_factory = session_factory
    runner._club_client = club_client

    assert await runner.run_once() is True
    assert runner.last_error is None
    async with session_factory() as db:
        assert await ActivityRepository(db).count() == 1


@pytest.mark.asyncio
async def test_runner_tick_logs_failure_and_continues(session_factory, club_client, caplog):
    club_client.get_recent_activities.side_effect = NoCredentialError(
        "No token found for user: admin. Please insert initial token."
    )
    runner = BackgroundIngestionRunner(interval_seconds=3600)
    runner._db_factory = session_factory
    runner._club_client = club_client

    assert await runner.run_once() is False
    assert runner.last_error.startswith("no_credential")
    assert "Failed to populate new activities" in caplog.text

    runner._running = True
    assert runner.status().startswith("unhealthy: no_credential: No token found")


@pytest.mark.asyncio
async def test_runner_start_stop(session_factory, club_client):
    runner = BackgroundIngestionRunner(interval_seconds=3600)
    assert runner.status() == "stopped"

    await runner.start(session_factory, club_client)
    assert runner.running
    assert runner.status() == "healthy"
    await runner.stop()

    assert not runner.running
    assert runner.status() == "stopped"
    assert runner._task is None
