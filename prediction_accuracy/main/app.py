"""
Main Application - Main Layer

FastAPI entry point: loads settings, initializes the container and
mounts the prediction, accuracy and system routers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prediction_accuracy.main.config import get_settings
from prediction_accuracy.main.container import app_lifespan, init_container
from prediction_accuracy.presentation.controllers import (
    accuracy_router,
    predictions_router,
    system_router,
)
from prediction_accuracy.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

# Bootstrap logging from LOG_* env until settings are loaded
configure_logging()

settings = get_settings()

update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Record the startup time and manage container resources."""
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    init_container(settings)

    app = FastAPI(
        title=settings.service.title,
        description=settings.service.description,
        version=settings.service.version,
        debug=settings.service.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(predictions_router)
    app.include_router(accuracy_router)
    app.include_router(system_router)

    return app


app = create_app()
