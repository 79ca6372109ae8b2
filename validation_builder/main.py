# Main application entry point

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
import uvicorn

from validation_builder import __version__
from validation_builder.api.routes import router
from validation_builder.common.logging_config import setup_logging
from validation_builder.common.middleware import RequestTrackingMiddleware
from validation_builder.config.settings import get_settings
from validation_builder.patterns.client import PatternRegistryClient
from validation_builder.session import get_session

settings = get_settings()
setup_logging(settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the pattern registry once at startup."""
    if settings.pattern_registry_enabled:
        client = PatternRegistryClient()
        logger.info(f"Fetching patterns from {client.url}")
        result = await run_in_threadpool(client.fetch)
        get_session().apply_registry_patterns(result)
        if not result.ok:
            logger.warning(result.notice)
    else:
        logger.info("Pattern registry disabled, starting with no patterns")

    yield


app = FastAPI(
    title="Validation JSON Builder API",
    description="Infer, edit and round-trip Validation JSON schemas",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestTrackingMiddleware)

# Include API routes
app.include_router(router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Validation JSON Builder API",
        "version": __version__,
        "status": "running",
        "docs": "/docs"
    }


@app.get("/health")
async def health():
    """Health check endpoint (alias for /live)"""
    return {"status": "healthy"}


@app.get("/live")
async def liveness():
    """Liveness check endpoint"""
    return {"status": "alive"}


if __name__ == "__main__":
    uvicorn.run(
        "validation_builder.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug
    )
