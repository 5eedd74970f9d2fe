"""
Strava token cache.

Keeps the live credential per identity in memory and refreshes it through
Strava when the stored one is expired or about to expire.

Lookup order:
1. In-memory entry that has not expired: returned with no I/O at all.
2. Expired in-memory entry: evicted, then treated as a miss.
3. Stored credential missing: NoCredentialError (operator must seed one).
4. Stored credential expired or expiring within 5 minutes: refreshed,
   written back to the store, cached and returned.
5. Stored credential still fresh: cached and returned.

The cache is shared by every request. Entries are only touched through
single dict operations and no lock is held across an await, so two callers
that miss at the same time may both refresh. The last write to the store
wins; this costs one extra HTTP call and is accepted.
"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.base import utcnow
from app.shared.errors import NoCredentialError
from .models import StravaAuthToken
from .oauth import StravaOAuth
from .repository import StravaTokenRepository

logger = logging.getLogger(__name__)


class TokenCache:
    """
    In-memory credential cache with expiry-aware refresh.

    Usage:
        cache = TokenCache(AsyncSessionLocal, StravaOAuth(config), admin_id="admin")
        token = await cache.get_valid_token("admin")
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        oauth: StravaOAuth,
        admin_id: str = "admin",
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_factory = session_factory
        self._oauth = oauth
        self._clock = clock
        self.admin_id = admin_id
        self._tokens: dict[str, StravaAuthToken] = {}

    async def get_admin_token(self) -> str:
        """Get a valid access token for the configured admin identity."""
        return await self.get_valid_token(self.admin_id)

    async def get_valid_token(self, identity: str) -> str:
        """
        Get a valid access token for an identity, refreshing if needed.

        Raises:
            NoCredentialError: No stored credential for identity
            ExternalAPIError: Refresh request failed
            DatabaseError: Credential store unavailable
        """
        now = self._clock()

        cached = self._tokens.get(identity)
        if cached is not None:
            if not cached.is_expired(now):
                logger.debug(f"Using cached token for {identity}")
                return cached.access_token
            logger.info(f"Found expired token in cache for {identity}. Evicting.")
            self._tokens.pop(identity, None)

        logger.info(f"Cache miss for {identity}. Checking database for token")
        async with self._session_factory() as db:
            repo = StravaTokenRepository(db)
            stored = await repo.get_for_identity(identity)

            if stored is None:
                raise NoCredentialError(
                    f"No token found for user: {identity}. "
                    f"Please insert initial token."
                )

            if stored.is_expired(now) or stored.expires_soon(now):
                logger.info(f"Token for {identity} expired or expiring. Refreshing")
                fresh = await self._refresh(stored)
                await repo.upsert_token(fresh)
                await db.commit()
                self._tokens[identity] = fresh
                logger.info(f"Token refresh for {identity} successful")
                return fresh.access_token

        self._tokens[identity] = stored
        return stored.access_token

    async def _refresh(self, old: StravaAuthToken) -> StravaAuthToken:
        """Exchange the stored refresh token for a new credential (same identity)."""
        response = await self._oauth.refresh_token(old.refresh_token)
        return StravaAuthToken(
            id=old.id,
            token_type=response.token_type,
            access_token=response.access_token,
            refresh_token=response.refresh_token,
            expires_at=response.expires_at,
            expires_in=response.expires_in,
        )
