"""
FastAPI backend for the aquaculture site map.

Serves normalised regional site data (sites, filter facets, map centre and
company colours) read from the configured regional exports.
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import regions, sites
from pipeline.config import get_settings
from pipeline.utils.logging import logging_disabled, setup_logging

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
SERVICE_NAME = "Aquaculture Sites API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings = get_settings()
    if not logging_disabled():
        log_file = setup_logging(level="DEBUG" if settings.api.debug else None)
        if log_file:
            logger.info(f"[STARTUP] Pipeline log file: {log_file}")
    logger.info(f"Starting {SERVICE_NAME}...")
    logger.info(f"[STARTUP] Reading site data from {settings.sites.data_dir.resolve()}")
    if settings.sites.norway_remote_url:
        logger.info(f"[STARTUP] Norway data from {settings.sites.norway_remote_url}")
    yield
    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=SERVICE_NAME,
    description="Normalised aquaculture site data for the UK, Iceland, Norway, Canada and Chile",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS - allow frontend to connect (configured via API_CORS_ORIGINS env var)
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With"],
)

# GZip compression for responses > 500 bytes (site lists compress well)
app.add_middleware(GZipMiddleware, minimum_size=500)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Report every HTTP error as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# Include routers
app.include_router(sites.router, prefix="/api/sites", tags=["sites"])
app.include_router(regions.router, prefix="/api", tags=["regions"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "version": API_VERSION, "service": SERVICE_NAME}
