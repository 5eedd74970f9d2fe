"""
Tests for TeamStatsService aggregation.
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio

from app.features.athletes.models import Athlete
from app.features.team_stats.service import TeamStatsService
from app.shared.errors import InternalConversionError

LA = ZoneInfo("America/Los_Angeles")
UTC = timezone.utc
START = date(2025, 1, 1)
NOW = datetime(2025, 1, 31, 12, 0, tzinfo=UTC)


@pytest_asyncio.fixture
async def roster(db):
    db.add_all([
        Athlete(id="1", name="Jane Doe", team="bulls", event="10k"),
        Athlete(id="2", name="Sam Lee", team="sharks", event="half"),
    ])
    await db.commit()


@pytest.fixture
def service(db):
    return TeamStatsService(db, START, LA)


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=UTC)


@pytest.mark.asyncio
async def test_two_team_scenario(db, roster, service, make_stored_activity):
    db.add_all([
        make_stored_activity("Jane Doe", 5000.0, _utc(2025, 1, 7, 18)),
        make_stored_activity("Jane Doe", 3000.0, _utc(2025, 1, 9, 18)),
        make_stored_activity("Sam Lee", 10000.0, _utc(2025, 1, 14, 18)),
    ])
    await db.commit()

    stats = await service.get_team_stats(now=NOW)

    assert stats.bulls.athlete_kilometers == {"Jane Doe": pytest.approx(8.0)}
    assert len(stats.bulls.weekly_kilometers) == 1
    bulls_week = stats.bulls.weekly_kilometers[0]
    assert bulls_week.week_start == datetime(2025, 1, 6, tzinfo=LA)
    assert bulls_week.weekly_team_kilometers == pytest.approx(8.0)
    assert bulls_week.weekly_running_sum == pytest.approx(8.0)
    assert bulls_week.weekly_athlete_kilometers == {"Jane Doe": pytest.approx(8.0)}

    assert stats.sharks.athlete_kilometers == {"Sam Lee": pytest.approx(10.0)}
    sharks_week = stats.sharks.weekly_kilometers[0]
    assert sharks_week.week_start == datetime(2025, 1, 13, tzinfo=LA)
    assert sharks_week.weekly_team_kilometers == pytest.approx(10.0)
    assert sharks_week.weekly_running_sum == pytest.approx(10.0)


@pytest.mark.asyncio
async def test_running_sums_over_three_weeks(db, roster, service, make_stored_activity):
    # Inserted out of order on purpose
    db.add_all([
        make_stored_activity("Jane Doe", 3000.0, _utc(2025, 1, 21, 18)),
        make_stored_activity("Jane Doe", 5000.0, _utc(2025, 1, 7, 18)),
        make_stored_activity("Jane Doe", 2000.0, _utc(2025, 1, 15, 18)),
        make_stored_activity("Jane Doe", 4000.0, _utc(2025, 1, 16, 18)),
    ])
    await db.commit()

    stats = await service.get_team_stats(now=NOW)
    weeks = stats.bulls.weekly_kilometers

    assert [w.week_start.date() for w in weeks] == [
        date(2025, 1, 6), date(2025, 1, 13), date(2025, 1, 20),
    ]
    assert [w.weekly_team_kilometers for w in weeks] == pytest.approx([5.0, 6.0, 3.0])
    assert [w.weekly_running_sum for w in weeks] == pytest.approx([5.0, 11.0, 14.0])
    assert stats.bulls.athlete_kilometers["Jane Doe"] == pytest.approx(14.0)
    assert stats.sharks.weekly_kilometers == []


@pytest.mark.asyncio
async def test_only_rostered_runs_count(db, roster, service, make_stored_activity):
    db.add_all([
        make_stored_activity("Jane Doe", 5000.0, _utc(2025, 1, 7, 18)),
        make_stored_activity("Jane Doe", 40000.0, _utc(2025, 1, 8, 18), sport_type="Ride"),
        make_stored_activity("Jane Doe", 7000.0, _utc(2025, 1, 8, 19), sport_type=None),
        make_stored_activity("Jane Doe", None, _utc(2025, 1, 8, 20)),
        make_stored_activity("Not Rostered", 9000.0, _utc(2025, 1, 8, 21)),
        make_stored_activity(None, 9000.0, _utc(2025, 1, 8, 22)),
    ])
    await db.commit()

    stats = await service.get_team_stats(now=NOW)

    assert stats.bulls.athlete_kilometers == {"Jane Doe": pytest.approx(5.0)}
    assert stats.bulls.weekly_kilometers[0].weekly_team_kilometers == pytest.approx(5.0)
    assert stats.sharks.athlete_kilometers == {}


@pytest.mark.asyncio
async def test_unknown_team_is_skipped(db, roster, service, make_stored_activity):
    db.add(Athlete(id="3", name="Ana Ruiz", team="dolphins"))
    db.add(make_stored_activity("Ana Ruiz", 5000.0, _utc(2025, 1, 7, 18)))
    await db.commit()

    stats = await service.get_team_stats(now=NOW)

    assert stats.bulls.athlete_kilometers == {}
    assert stats.sharks.athlete_kilometers == {}


@pytest.mark.asyncio
async def test_window_bounds(db, roster, service, make_stored_activity):
    competition_start = _utc(2025, 1, 1, 8)  # Jan 1 00:00 PST
    db.add_all([
        make_stored_activity("Jane Doe", 1000.0, competition_start - timedelta(seconds=1)),
        make_stored_activity("Jane Doe", 2000.0, competition_start),
        make_stored_activity("Jane Doe", 3000.0, NOW),
        make_stored_activity("Jane Doe", 4000.0, NOW + timedelta(seconds=1)),
    ])
    await db.commit()

    stats = await service.get_team_stats(now=NOW)

    assert stats.bulls.athlete_kilometers["Jane Doe"] == pytest.approx(5.0)


@pytest.mark.asyncio
async def test_week_follows_local_date(db, roster, service, make_stored_activity):
    # Monday 05:00 UTC is Sunday 21:00 in Los Angeles
    db.add(make_stored_activity("Sam Lee", 6000.0, _utc(2025, 1, 13, 5)))
    await db.commit()

    stats = await service.get_team_stats(now=NOW)

    assert stats.sharks.weekly_kilometers[0].week_start == datetime(2025, 1, 6, tzinfo=LA)


@pytest.mark.asyncio
async def test_camel_case_output(db, roster, service, make_stored_activity):
    db.add(make_stored_activity("Jane Doe", 5000.0, _utc(2025, 1, 7, 18)))
    await db.commit()

    stats = await service.get_team_stats(now=NOW)
    payload = stats.model_dump(mode="json", by_alias=True)

    week = payload["bulls"]["weeklyKilometers"][0]
    assert set(week) == {
        "weekStart", "weeklyTeamKilometers", "weeklyRunningSum", "weeklyAthleteKilometers",
    }
    assert week["weekStart"] == "2025-01-06T00:00:00-08:00"
    assert payload["bulls"]["athleteKilometers"] == {"Jane Doe": 5.0}


@pytest.mark.asyncio
async def test_empty(db, service):
    stats = await service.get_team_stats(now=NOW)

    assert stats.bulls.athlete_kilometers == {}
    assert stats.bulls.weekly_kilometers == []
    assert stats.sharks.weekly_kilometers == []


@pytest.mark.asyncio
async def test_week_start_in_dst_gap_fails(db, roster, make_stored_activity):
    # Tehran skipped from 00:00 to 01:00 on Monday 2021-03-22
    service = TeamStatsService(db, date(2021, 3, 1), ZoneInfo("Asia/Tehran"))
    db.add(make_stored_activity("Jane Doe", 5000.0, _utc(2021, 3, 23, 12)))
    await db.commit()

    with pytest.raises(InternalConversionError, match="Nonexistent local time"):
        await service.get_team_stats(now=_utc(2021, 3, 31, 12))
