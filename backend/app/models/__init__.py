"""
Database Models

Base and shared column types live here; feature models are imported lazily
to avoid circular imports. Use direct imports from features/ modules when
possible.
"""

from app.models.base import Base, UTCDateTime, utcnow


def load_all_models() -> dict:
    """Import every feature model so it is registered with Base.metadata."""
    from app.features.strava.models import StravaAuthToken
    from app.features.activities.models import BullSharkActivity
    from app.features.athletes.models import Athlete

    return {
        "StravaAuthToken": StravaAuthToken,
        "BullSharkActivity": BullSharkActivity,
        "Athlete": Athlete,
    }


# Expose as module-level attributes for convenience
def __getattr__(name):
    models = load_all_models()
    if name in models:
        return models[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    "UTCDateTime",
    "utcnow",
    "load_all_models",
    "StravaAuthToken",
    "BullSharkActivity",
    "Athlete",
]
