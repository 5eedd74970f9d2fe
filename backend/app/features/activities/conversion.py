"""
Club activity identity and conversion.

Strava's club feed has no activity IDs, so each record is identified by a
SHA-256 digest of the fields least likely to repeat for distinct activities:

    "{first}|{last}|{distance}|{moving_time}|{elapsed_time}"

Two activities by the same athlete with identical distance and times hash
to the same ID and are stored once. Widening the digest input would change
IDs of rows already stored, so the field set stays as is.

All functions here are pure.
"""

import hashlib
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from app.models.base import utcnow
from app.shared.constants import ACTIVITY_HASH_SEPARATOR, UNKNOWN_NAME
from app.shared.errors import ConversionError
from app.features.strava.schemas import ClubActivity
from .schemas import ActivityRecord


def format_distance(distance: float) -> str:
    """
    Render a distance the way stored IDs were built.

    Integral values drop the fractional part ("5000"); everything else uses
    the shortest round-tripping digits in positional notation ("5012.3").
    """
    if distance.is_integer():
        return str(int(distance))
    return format(Decimal(repr(distance)), "f")


def create_activity_hash(activity: ClubActivity) -> str:
    """
    Compute the content-derived ID of a club activity.

    Raises:
        ConversionError: athlete, first/last name, distance, moving time
            or elapsed time is missing
    """
    athlete = activity.athlete
    if athlete is None:
        raise ConversionError("Activity missing athlete")
    if athlete.first_name is None:
        raise ConversionError("Athlete missing first name")
    if athlete.last_name is None:
        raise ConversionError("Athlete missing last name")
    if activity.distance is None:
        raise ConversionError("Activity missing distance")
    if activity.moving_time is None:
        raise ConversionError("Activity missing moving time")
    if activity.elapsed_time is None:
        raise ConversionError("Activity missing elapsed time")

    composite = ACTIVITY_HASH_SEPARATOR.join([
        athlete.first_name,
        athlete.last_name,
        format_distance(activity.distance),
        str(activity.moving_time),
        str(activity.elapsed_time),
    ])
    return hashlib.sha256(composite.encode("utf-8")).hexdigest()


def athlete_display_name(activity: ClubActivity) -> str:
    """Display name as "First Last", with a placeholder for a missing part."""
    athlete = activity.athlete
    first = athlete.first_name if athlete and athlete.first_name is not None else UNKNOWN_NAME
    last = athlete.last_name if athlete and athlete.last_name is not None else UNKNOWN_NAME
    return f"{first} {last}"


def convert_activity(activity: ClubActivity, observed_at: datetime) -> ActivityRecord:
    """
    Convert one club activity into an internal record.

    Args:
        activity: Upstream club activity
        observed_at: Batch observation time (shared by the whole batch)

    Raises:
        ConversionError: record cannot be identified
    """
    return ActivityRecord(
        id=create_activity_hash(activity),
        date=observed_at,
        athlete_name=athlete_display_name(activity),
        resource_state=activity.resource_state,
        name=activity.name,
        distance=activity.distance,
        moving_time=activity.moving_time,
        elapsed_time=activity.elapsed_time,
        total_elevation_gain=activity.total_elevation_gain,
        sport_type=activity.sport_type,
        workout_type=activity.workout_type,
        device_name=activity.device_name,
    )


def convert_activities(
    activities: Sequence[ClubActivity],
    observed_at: Optional[datetime] = None
) -> list[ActivityRecord]:
    """
    Convert a batch; any unusable record rejects the whole batch.

    Args:
        activities: Upstream club activities
        observed_at: Batch time, defaults to now (UTC)

    Raises:
        ConversionError: first record that cannot be identified
    """
    batch_time = observed_at or utcnow()
    return [convert_activity(activity, batch_time) for activity in activities]
