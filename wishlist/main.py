"""Main application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Response
from prometheus_fastapi_instrumentator import Instrumentator

from wishlist.api.errors import register_exception_handlers
from wishlist.api.routes import extract, goods, retailers
from wishlist.config import settings

# Configure structured logging
from wishlist.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting wishlist extraction service...")
    logger.info(
        f"Extraction budget {settings.extraction_timeout_seconds:g}s, "
        f"generic domains {'allowed' if settings.allow_generic_domains else 'rejected'}"
    )

    yield

    # Browser sessions are per request and closed by the extractor
    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Wishlist",
    description="Extract product information from retailer pages for wishlists",
    version="0.1.0",
    lifespan=lifespan,
)

# Add Prometheus instrumentation
instrumentator = Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    should_respect_env_var=True,
    should_instrument_requests_inprogress=True,
    excluded_handlers=["/metrics", "/health", "/favicon.ico"],
    inprogress_name="http_requests_inprogress",
    inprogress_labels=True,
)
instrumentator.instrument(app).expose(app, include_in_schema=True, tags=["monitoring"])

register_exception_handlers(app)

# Include API routes
app.include_router(extract.router)
app.include_router(goods.router)
app.include_router(retailers.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/favicon.ico")
async def favicon():
    """Return empty favicon response to avoid 404 noise."""
    return Response(status_code=204)


if __name__ == "__main__":
    # Run with uvicorn
    uvicorn.run(
        "wishlist.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
