"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from nubian.config import APP_VERSION, get_settings
from nubian.database import engine

# Import routers
from nubian.routers import (
    health,
    papers,
    keywords,
    fields,
    users,
    donations,
)

# Import middleware
from nubian.middleware import logging_middleware, register_exception_handlers
from nubian.utils.logger import configure_logging, get_logger

settings = get_settings()

# Configure logging early
configure_logging(log_level=settings.log_level, debug=settings.debug)
log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    log.info("starting application", debug=settings.debug, log_level=settings.log_level)
    if not settings.pinata_jwt:
        log.warning("content store not configured", setting="pinata_jwt")
    if not settings.paystack_secret_key:
        log.warning("paystack webhook not configured", setting="paystack_secret_key")

    yield

    log.info("shutting down application")
    await engine.dispose()
    log.info("database connections closed")


app = FastAPI(
    title="Nubian Research API",
    description="Nubian Research - decentralized science paper repository",
    version=APP_VERSION,
    lifespan=lifespan,
)

# Register exception handlers first
register_exception_handlers(app)

# CORS middleware (must be first in middleware stack)
_cors_origins = settings.get_cors_origins_list()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins or ["*"],
    allow_credentials=bool(_cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

# Request logging middleware
app.middleware("http")(logging_middleware)

# Register routers
app.include_router(health.router, tags=["Health"])
app.include_router(papers.router, tags=["Papers"])
app.include_router(keywords.router, tags=["Keywords"])
app.include_router(fields.router, tags=["Fields"])
app.include_router(users.router, tags=["Users"])
app.include_router(donations.router, tags=["Donations"])


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Nubian Research API - Decentralized Science Platform",
        "version": APP_VERSION,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "nubian.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
