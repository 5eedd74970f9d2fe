"""
Club activity ingestion module.

Usage:
    from app.features.activities import ActivityIngestionService, ActivityRepository

Components:
- conversion: content-hash identity and ClubActivity -> ActivityRecord
- ActivityIngestionService: fetch, convert and persist one page
- BackgroundIngestionRunner: periodic ingestion

Models:
- BullSharkActivity: stored activity
"""

from .models import BullSharkActivity
from .schemas import ActivityRecord, PopulateResponse
from .conversion import create_activity_hash, convert_activity, convert_activities
from .repository import ActivityRepository
from .service import ActivityIngestionService

__all__ = [
    # Models
    "BullSharkActivity",
    # Schemas
    "ActivityRecord",
    "PopulateResponse",
    # Conversion
    "create_activity_hash",
    "convert_activity",
    "convert_activities",
    # Repository / service
    "ActivityRepository",
    "ActivityIngestionService",
]
