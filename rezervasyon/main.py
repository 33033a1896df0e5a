"""
Rezervasyon API - Main Application Entry Point

Bus and flight trip reservations:
- Trip administration with per-type seat and price rules
- Seat maps with available / selected / reserved states
- Conflict-safe reservation confirmation (optimistic re-check at commit)
- Structured logging with request correlation and Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rezervasyon.core.config import get_settings
from rezervasyon.core.logging import setup_logging, get_logger
from rezervasyon.core.metrics import metrics_endpoint
from rezervasyon.api.router import api_router
from rezervasyon.api.middleware import RequestLoggingMiddleware
from rezervasyon.api.exception_handlers import register_exception_handlers
from rezervasyon.db.session import init_db, close_db
from rezervasyon.services.cache_service import get_redis, close_redis, get_cache_stats

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    await init_db()

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.info("redis_unavailable", message="Running without cache")

    yield

    await close_redis()
    await close_db()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Bus and flight trip reservations with seat maps",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
