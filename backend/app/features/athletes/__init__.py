"""
Athlete roster module.

Usage:
    from app.features.athletes import Athlete, AthleteRepository
"""

from .models import Athlete
from .schemas import AthleteResponse
from .repository import AthleteRepository

__all__ = [
    "Athlete",
    "AthleteResponse",
    "AthleteRepository",
]
