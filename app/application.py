"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.api import create_api_router
from app.config import Settings, get_settings
from app.models.subject import SUBJECT_VALIDATOR
from app.utils.db import MongoManager
from app.utils.exception_handlers import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    mongo: MongoManager = app.state.mongo
    settings: Settings = app.state.settings
    # Startup
    await mongo.verify_connection()
    await mongo.ensure_validator(settings.subjects_collection, SUBJECT_VALIDATOR)
    logger.info("Application started", extra={"environment": settings.environment})
    yield
    # Shutdown
    await mongo.close()


def create_app(
    settings: Optional[Settings] = None, mongo: Optional[MongoManager] = None
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Application settings; read from the environment if omitted.
        mongo: Storage client manager; built from settings if omitted.

    Returns:
        Configured application. The database is connected on startup.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        description="CRUD API for subjects and the users enrolled in them",
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.mongo = mongo or MongoManager(settings)

    register_exception_handlers(app)
    app.include_router(create_api_router())

    return app
