"""
Application lifespan management
Handles startup and shutdown events
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blog_api import models  # noqa: F401  (registers tables on Base.metadata)
from blog_api.config import settings
from blog_api.core.database import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manages application lifecycle events"""

    # STARTUP
    logger.info("=" * 60)
    logger.info(f"STARTING {settings.APP_NAME.upper()}")
    logger.info("=" * 60)

    db = Database(settings)
    try:
        db.open()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise RuntimeError("Database initialization failed") from e

    app.state.db = db

    logger.info("=" * 60)
    logger.info(f"SERVICE READY - Listening on port {settings.SERVICE_PORT}")
    logger.info("=" * 60)

    yield

    # SHUTDOWN
    logger.info("Shutting down blog API...")
    db.close()
