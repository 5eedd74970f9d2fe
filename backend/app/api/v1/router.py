"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import activities, athletes, team_stats

api_router = APIRouter()

api_router.include_router(activities.router)
api_router.include_router(athletes.router)
api_router.include_router(team_stats.router)
