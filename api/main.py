"""
Lead Cadence Platform API - Main Application.

FastAPI application exposing the scoring webhook and the cadence trigger.
"""

import logging

from fastapi import FastAPI

from api import __version__

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Create FastAPI application
app = FastAPI(
    title="Lead Cadence Platform API",
    description="Lead scoring and outreach cadence triggers",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Lead Cadence Platform API",
        "version": __version__,
        "docs": "/docs",
    }


# Import and include routers
from api.routers import cadence, scoring

app.include_router(scoring.router, prefix="/api/v1", tags=["Scoring"])
app.include_router(cadence.router, prefix="/api/v1", tags=["Cadence"])
