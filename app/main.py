"""FastAPI application for the agricultural document classifier service."""

import json
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any, AsyncIterator, Dict, Union

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded  # type: ignore[import-not-found]

from app.config import get_settings
from app.db.supabase_client import get_supabase_client
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import get_limiter, rate_limit_exceeded_handler

# Application metadata
VERSION = "1.0.0"
COMMIT_HASH = "development"  # This can be set via environment variable or build process

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan event handler for startup and shutdown."""
    try:
        # Raises ValidationError if required env vars are missing
        settings = get_settings()

        logger.info("Starting Agri Classifier API v%s", VERSION)
        logger.info("Sources table: %s", settings.sources_table)
        logger.info("Classify rate limit: %s", settings.classify_rate_limit)
        logger.info("Environment validation: OK")

    except Exception as e:
        logger.error("Startup validation failed: %s", e)
        raise

    yield

    logger.info("Shutting down Agri Classifier API")


app = FastAPI(
    title="Agri Classifier API",
    description="Rule-based classification of agricultural knowledge documents",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add rate limiter to app state (required by slowapi)
limiter = get_limiter()
app.state.limiter = limiter

app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

# Add logging middleware (first, so it wraps all other middleware)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.get("/health", response_model=None)
async def health_check() -> Union[Dict[str, Any], Response]:
    """
    Health check endpoint that verifies the document store is reachable.

    Returns:
        JSON response with overall status and individual service statuses.

    Status Codes:
        200: All services healthy
        503: One or more services unavailable
    """
    timestamp = datetime.now(UTC).isoformat()
    services: Dict[str, str] = {}
    overall_healthy = True

    try:
        supabase_client = get_supabase_client()
        response = supabase_client.table(get_settings().sources_table).select("id").limit(1).execute()
        if response is not None:
            services["supabase"] = "healthy"
        else:
            services["supabase"] = "unhealthy: no response"
            overall_healthy = False
    except Exception as e:
        services["supabase"] = f"unhealthy: {str(e)}"
        overall_healthy = False

    response_data: Dict[str, Any] = {
        "status": "healthy" if overall_healthy else "unhealthy",
        "timestamp": timestamp,
        "services": services,
    }

    if not overall_healthy:
        return Response(
            content=json.dumps(response_data),
            status_code=503,
            media_type="application/json",
        )

    return response_data


@app.get("/version")
async def version_info() -> Dict[str, str]:
    """
    Get version information for the API.

    Returns:
        JSON with version number and commit hash.
    """
    return {
        "version": VERSION,
        "commit_hash": COMMIT_HASH,
    }


from app.routers import classification  # noqa: E402
app.include_router(classification.router)

from app.routers import stats  # noqa: E402
app.include_router(stats.router)
