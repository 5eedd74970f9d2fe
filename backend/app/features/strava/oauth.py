"""
Strava OAuth token refresh.

Exchanges a refresh token for a new credential. The initial credential is
seeded out-of-band (scripts/seed_token.py), so only the refresh grant is
needed here.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.config import StravaConfig
from app.shared.errors import ExternalAPIError
from .schemas import StravaTokenResponse

logger = logging.getLogger(__name__)


class StravaOAuth:
    """
    Strava OAuth handler.

    Usage:
        oauth = StravaOAuth(StravaConfig.from_settings(settings))
        response = await oauth.refresh_token(refresh_token)
    """

    TOKEN_URL = "https://www.strava.com/oauth/token"

    def __init__(
        self,
        config: StravaConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.client_id = config.client_id
        self.client_secret = config.client_secret
        self._transport = transport
        self._timeout = timeout

    async def refresh_token(self, refresh_token: str) -> StravaTokenResponse:
        """
        Refresh an access token.

        Args:
            refresh_token: Current refresh token

        Returns:
            Parsed token response (new access token, expiry, refresh token)

        Raises:
            ExternalAPIError: Transport failure, non-2xx status or bad body
        """
        async with httpx.AsyncClient(
            transport=self._transport, timeout=self._timeout
        ) as client:
            try:
                response = await client.post(
                    self.TOKEN_URL,
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "grant_type": "refresh_token",
                        "refresh_token": refresh_token,
                    }
                )
            except httpx.HTTPError as e:
                raise ExternalAPIError(f"Strava API request failed: {e}") from e

        if not response.is_success:
            logger.error(f"Strava token refresh failed: {response.text}")
            raise ExternalAPIError(
                f"Strava token refresh failed ({response.status_code}): {response.text}"
            )

        try:
            return StravaTokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ExternalAPIError(f"Failed to parse Strava response: {e}") from e
