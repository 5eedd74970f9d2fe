"""
Tests for ActivityRepository against in-memory SQLite.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.features.activities.conversion import convert_activities
from app.features.activities.repository import ActivityRepository

OBSERVED_AT = datetime(2026, 1, 7, 18, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_insert_returns_new_row_count(db, make_club_activity):
    records = convert_activities(
        [make_club_activity(), make_club_activity(first="Sam", last="Lee")],
        OBSERVED_AT,
    )
    repo = ActivityRepository(db)

    assert await repo.insert_activities(records) == 2
    await db.commit()
    assert await repo.count() == 2


@pytest.mark.asyncio
async def test_same_record_twice_leaves_one_row(db, make_club_activity):
    repo = ActivityRepository(db)
    record = convert_activities([make_club_activity()], OBSERVED_AT)

    assert await repo.insert_activities(record) == 1
    await db.commit()

    # Re-ingested later: same identity, different batch time
    again = convert_activities([make_club_activity()], OBSERVED_AT + timedelta(hours=1))
    assert await repo.insert_activities(again) == 0
    await db.commit()

    stored = await repo.get_all_activities()
    assert len(stored) == 1
    assert stored[0].date == OBSERVED_AT


@pytest.mark.asyncio
async def test_duplicates_within_one_batch(db, make_club_activity):
    repo = ActivityRepository(db)
    records = convert_activities(
        [make_club_activity(), make_club_activity(name="Same numbers, other title")],
        OBSERVED_AT,
    )

    assert await repo.insert_activities(records) == 1
    await db.commit()
    assert await repo.count() == 1


@pytest.mark.asyncio
async def test_empty_batch_is_noop(db):
    assert await ActivityRepository(db).insert_activities([]) == 0


@pytest.mark.asyncio
async def test_get_all_newest_first(db, make_stored_activity):
    older = make_stored_activity(date=OBSERVED_AT - timedelta(days=1))
    newer = make_stored_activity(date=OBSERVED_AT)
    db.add_all([older, newer])
    await db.commit()

    stored = await ActivityRepository(db).get_all_activities()

    assert [a.id for a in stored] == [newer.id, older.id]
    assert stored[0].date.tzinfo is not None


@pytest.mark.asyncio
async def test_window_is_inclusive(db, make_stored_activity):
    start = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)
    end = datetime(2026, 1, 12, 7, 59, 59, tzinfo=timezone.utc)
    at_start = make_stored_activity(date=start)
    at_end = make_stored_activity(date=end)
    before = make_stored_activity(date=start - timedelta(seconds=1))
    after = make_stored_activity(date=end + timedelta(seconds=1))
    db.add_all([at_start, at_end, before, after])
    await db.commit()

    stored = await ActivityRepository(db).get_activities_in_window(start, end)

    assert {a.id for a in stored} == {at_start.id, at_end.id}


@pytest.mark.asyncio
async def test_window_accepts_non_utc_bounds(db, make_stored_activity):
    activity = make_stored_activity(date=datetime(2026, 1, 7, 18, 0, tzinfo=timezone.utc))
    db.add(activity)
    await db.commit()

    pacific = timezone(timedelta(hours=-8))
    start = datetime(2026, 1, 7, 9, 0, tzinfo=pacific)   # 17:00 UTC
    end = datetime(2026, 1, 7, 10, 0, tzinfo=pacific)    # 18:00 UTC

    stored = await ActivityRepository(db).get_activities_in_window(start, end)

    assert [a.id for a in stored] == [activity.id]
