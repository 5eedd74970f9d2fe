"""
Strava repositories.

Data access layer for the credential store.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import utcnow
from app.shared.repository import BaseRepository
from .models import StravaAuthToken


class StravaTokenRepository(BaseRepository[StravaAuthToken]):
    """Repository for Strava OAuth credentials, keyed by identity."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, StravaAuthToken)

    async def get_for_identity(self, identity: str) -> StravaAuthToken | None:
        """
        Get the stored credential for an identity.

        Args:
            identity: Credential identity (e.g. "admin")

        Returns:
            StravaAuthToken if found, None otherwise
        """
        return await self.get_by_id(identity)

    async def upsert_token(self, token: StravaAuthToken) -> None:
        """
        Insert the credential or overwrite the stored one for its identity.

        Args:
            token: Credential to persist (detached instance is fine)
        """
        await self.upsert(
            {
                "id": token.id,
                "token_type": token.token_type,
                "access_token": token.access_token,
                "refresh_token": token.refresh_token,
                "expires_at": token.expires_at,
                "expires_in": token.expires_in,
                "created_at": utcnow(),
                "updated_at": utcnow(),
            },
            update_columns=(
                "token_type",
                "access_token",
                "refresh_token",
                "expires_at",
                "expires_in",
                "updated_at",
            ),
        )
