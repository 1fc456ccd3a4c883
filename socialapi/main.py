"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from socialapi.api import auth, feed, graphql, images, websocket
from socialapi.api.errors import register_error_handlers
from socialapi.config import get_settings
from socialapi.logging_config import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    setup_logging(settings.log_level, settings.log_format)
    Path(settings.images_dir).mkdir(parents=True, exist_ok=True)
    logger.info(f"Starting social feed API ({settings.environment})")
    yield


app = FastAPI(
    title="Social Feed API",
    description="Posts feed with REST and GraphQL APIs and live updates",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_error_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(feed.router)
app.include_router(images.router)
app.include_router(graphql.router)
app.include_router(websocket.router)

# Uploaded post images
app.mount("/images", StaticFiles(directory=settings.images_dir, check_dir=False), name="images")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
