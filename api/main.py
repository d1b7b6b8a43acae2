"""
HSR Tools - FastAPI API Service Entry Point
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from api.routes import auth, game_data, profiles, users
from database.connection import close_db, get_async_session
from database.seeds.run_all_seeds import run_all_seeds
from shared.config import get_settings
from shared.errors import SeedingError
from shared.fastapi_errors import register_error_handlers
from shared.logging_config import configure_logging

# Configure structured JSON logging on startup
configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title="HSR Tools API",
    description="Game data, accounts and player profiles for the HSR Tools companion app",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

register_error_handlers(app)

app.include_router(auth.router, tags=["auth"])
app.include_router(users.router, tags=["users"])
app.include_router(game_data.router, tags=["game-data"])
app.include_router(profiles.router, tags=["profiles"])


@app.on_event("startup")
async def startup_event():
    """Log startup information and optionally seed game data."""
    logger.info(f"Starting {settings.PROJECT_NAME} API...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    if not settings.SEED_ON_STARTUP:
        return

    try:
        await run_all_seeds()
    except (SeedingError, SQLAlchemyError, OSError) as e:
        logger.error(f"Failed to seed data: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    await close_db()


@app.get("/health")
@app.get("/api/health")
async def health_check() -> JSONResponse:
    """
    Health check endpoint for Docker health checks and monitoring.

    Returns:
        200 OK if the database answers
        503 Service Unavailable if degraded
    """
    health_status = {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "database": "unknown",
    }
    status_code = 200

    try:
        async with get_async_session() as session:
            await session.execute(text("SELECT 1"))
            health_status["database"] = "connected"
    except (SQLAlchemyError, OSError):
        health_status["database"] = "disconnected"
        health_status["status"] = "degraded"
        status_code = 503

    return JSONResponse(status_code=status_code, content=health_status)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {
        "message": f"{settings.PROJECT_NAME} API",
        "version": "1.0.0",
        "health": "/health",
    }
