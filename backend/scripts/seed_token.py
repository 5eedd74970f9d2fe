#!/usr/bin/env python3
"""Seed the initial Strava credential.

The token cache cannot bootstrap itself: with no stored credential every
club request fails with NoCredentialError. Run this once with tokens from
the Strava OAuth flow (or the API settings page).

Usage:
    python backend/scripts/seed_token.py \
        --access-token "..." --refresh-token "..." --expires-at 1735689600

    # Different identity than STRAVA_ADMIN_ID
    python backend/scripts/seed_token.py --identity admin2 \
        --access-token "..." --refresh-token "..." --expires-at 1735689600
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.db.session import AsyncSessionLocal, init_db
from app.features.strava import StravaAuthToken, StravaTokenRepository


async def seed_token(args: argparse.Namespace) -> None:
    await init_db()

    token = StravaAuthToken(
        id=args.identity,
        token_type=args.token_type,
        access_token=args.access_token,
        refresh_token=args.refresh_token,
        expires_at=args.expires_at,
        expires_in=max(args.expires_at - int(time.time()), 0),
    )

    async with AsyncSessionLocal() as db:
        await StravaTokenRepository(db).upsert_token(token)
        await db.commit()

    print(f"Stored Strava token for '{args.identity}' (expires_at={args.expires_at})")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the initial Strava credential")
    parser.add_argument("--access-token", required=True, help="Strava access token")
    parser.add_argument("--refresh-token", required=True, help="Strava refresh token")
    parser.add_argument(
        "--expires-at",
        type=int,
        default=0,
        help="Access token expiry (Unix seconds). 0 forces a refresh on first use",
    )
    parser.add_argument(
        "--identity",
        default=settings.strava_admin_id,
        help=f"Credential identity (default: {settings.strava_admin_id})",
    )
    parser.add_argument("--token-type", default="Bearer", help="Token type (default: Bearer)")
    args = parser.parse_args()

    asyncio.run(seed_token(args))


if __name__ == "__main__":
    main()
