"""
Athlete roster endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.athletes import AthleteRepository, AthleteResponse

router = APIRouter(prefix="/athletes", tags=["Athletes"])


@router.get("", response_model=list[AthleteResponse])
async def get_athletes(db: AsyncSession = Depends(get_async_db)):
    """Full roster ordered by name."""
    return await AthleteRepository(db).get_all_athletes()
