"""
Strava club API client.

Reads the most recent activities of the configured club. The club feed
carries no activity IDs, which is why ingestion derives its own identity
(see app.features.activities.conversion).

Strava API Limits:
- 200 requests per 15 minutes
- 2,000 requests per day
One request per ingestion tick stays far below both.
"""

import logging
from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from app.config import StravaConfig
from app.shared.constants import CLUB_ACTIVITIES_PER_PAGE
from app.shared.errors import ExternalAPIError
from .schemas import ClubActivity
from .token_cache import TokenCache

logger = logging.getLogger(__name__)

_club_activities_adapter = TypeAdapter(list[ClubActivity])


class StravaClubClient:
    """
    Async client for the Strava club activities feed.

    Usage:
        client = StravaClubClient(config, token_cache)
        activities = await client.get_recent_activities()
    """

    API_URL = "https://www.strava.com/api/v3"

    def __init__(
        self,
        config: StravaConfig,
        token_cache: TokenCache,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.club_id = config.club_id
        self.token_cache = token_cache
        self._transport = transport
        self._timeout = timeout

    async def get_recent_activities(
        self,
        per_page: int = CLUB_ACTIVITIES_PER_PAGE
    ) -> list[ClubActivity]:
        """
        Fetch the most recent club activities (first page only).

        Raises:
            NoCredentialError: No admin credential stored
            ExternalAPIError: Request failed, non-2xx status or bad body
        """
        access_token = await self.token_cache.get_admin_token()

        async with httpx.AsyncClient(
            transport=self._transport, timeout=self._timeout
        ) as client:
            try:
                response = await client.get(
                    f"{self.API_URL}/clubs/{self.club_id}/activities",
                    params={
                        "page": 1,
                        "per_page": per_page,
                        "access_token": access_token,
                    }
                )
            except httpx.HTTPError as e:
                raise ExternalAPIError(f"Strava API request failed: {e}") from e

        # Log rate limit headers from Strava
        if "X-RateLimit-Limit" in response.headers:
            logger.debug(
                f"Strava rate limit: {response.headers.get('X-RateLimit-Usage')} "
                f"/ {response.headers.get('X-RateLimit-Limit')}"
            )

        if not response.is_success:
            logger.error(
                f"Strava API returned error {response.status_code}: {response.text}"
            )
            raise ExternalAPIError(
                f"Strava API error ({response.status_code}): {response.text}"
            )

        try:
            return _club_activities_adapter.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Error deserializing club activities: {e}")
            raise ExternalAPIError(f"Failed to parse club activities: {e}") from e

    async def health_check(self) -> None:
        """Verify a valid admin token can be obtained."""
        await self.token_cache.get_admin_token()
