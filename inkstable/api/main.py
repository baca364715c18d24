"""FastAPI application entry point for the InkStable service."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from .routes import router
from .settings import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger("inkstable.api")

app = FastAPI(
    title="InkStable API",
    description="Stylus stroke stabilization as a service",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, tags=["stabilize"])


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting InkStable API v{__version__}")
    valid_keys = settings.get_valid_api_keys()
    if valid_keys:
        logger.info(f"Loaded {len(valid_keys)} valid API keys")
    else:
        logger.warning("No API keys configured - accepting all requests")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "InkStable API",
        "version": __version__,
        "status": "operational",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "inkstable.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
