"""
BullShark API

FastAPI application for the Bulls vs Sharks club running challenge.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings, StravaConfig
from app.db.session import init_db, get_async_db, AsyncSessionLocal
from app.api.v1.router import api_router
from app.features.activities.background import background_ingestion
from app.features.strava import StravaClubClient, StravaOAuth, TokenCache
from app.shared.errors import BullSharkError
from app.shared.repository import ping


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Strava Setup ===
def _setup_strava(app: FastAPI):
    """Build the shared token cache and club client."""
    app.state.token_cache = None
    app.state.club_client = None
    if not settings.strava_configured:
        logger.info("Strava skipped (STRAVA_CLIENT_ID, STRAVA_CLIENT_SECRET or STRAVA_CLUB_ID not set)")
        return

    config = StravaConfig.from_settings(settings)
    token_cache = TokenCache(AsyncSessionLocal, StravaOAuth(config), admin_id=config.admin_id)
    app.state.token_cache = token_cache
    app.state.club_client = StravaClubClient(config, token_cache)
    logger.info(f"Strava configured for club {config.club_id}")


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting BullShark API...")
    await init_db()
    logger.info("Database initialized")

    _setup_strava(app)

    # Start scheduled ingestion
    ingestion_started = False
    if app.state.club_client and settings.ingestion_enabled:
        await background_ingestion.start(AsyncSessionLocal, app.state.club_client)
        ingestion_started = True

    yield

    # Shutdown
    if ingestion_started:
        await background_ingestion.stop()
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="BullShark API",
    description="Club activity ingestion and team standings for the Bulls vs Sharks challenge",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Errors ===
@app.exception_handler(BullSharkError)
async def bullshark_error_handler(request: Request, exc: BullSharkError):
    """Render application errors as {"error", "kind"} with their status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check(request: Request, db: AsyncSession = Depends(get_async_db)):
    """Database, Strava and scheduled ingestion health."""
    try:
        await ping(db)
        database = "healthy"
    except BullSharkError as e:
        database = f"unhealthy: {e.message}"

    token_cache = getattr(request.app.state, "token_cache", None)
    if token_cache is None:
        strava = "unhealthy: not configured"
    else:
        try:
            await token_cache.get_admin_token()
            strava = "healthy"
        except BullSharkError as e:
            strava = f"unhealthy: {e.kind}: {e.message}"

    overall = "healthy" if database == "healthy" and strava == "healthy" else "unhealthy"
    return {
        "database": database,
        "strava": strava,
        "ingestion": background_ingestion.status(),
        "overall": overall,
    }
