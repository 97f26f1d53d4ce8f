"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI

from calcdesk.config import get_settings
from calcdesk.api import router as api_router

settings = get_settings()

# Logging setup
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Calculation engines for the calculator catalog",
    version="0.1.0",
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": "0.1.0"}


def run():
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    uvicorn.run("calcdesk.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
