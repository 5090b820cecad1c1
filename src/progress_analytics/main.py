"""FastAPI application for the progress analytics engine."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .api.routes import analytics, catalog
from .api.exception_handlers import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info(f"Starting Progress Analytics API v{__version__}")
    logger.info(f"Anomaly threshold: {settings.anomaly_threshold}, default trend period: {settings.default_trend_period}")
    yield
    logger.info("Shutting down Progress Analytics API")


settings = get_settings()

app = FastAPI(
    title="Progress Analytics API",
    description="Personal records, exercise progress and body measurement analytics",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(analytics.router, prefix="/api/v1/analytics", tags=["analytics"])
app.include_router(catalog.router, prefix="/api/v1/measurement-types", tags=["measurement-types"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Progress Analytics API",
        "version": __version__,
        "status": "healthy",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
