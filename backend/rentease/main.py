"""RentEase - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rentease.core.config import get_settings
from rentease.core.env_validation import validate_environment
from rentease.routers import (
    auth_router,
    properties_router,
    tenants_router,
    rent_payments_router,
    maintenance_router,
    dashboard_router,
)
from rentease.services import start_scheduler

# CRITICAL: Validate environment before proceeding
# This will hard-fail (exit 1) if required configuration is missing
validate_environment()

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    scheduler = start_scheduler(settings)
    yield
    # Shutdown
    scheduler.shutdown(wait=False)
    logger.info("[SCHEDULER] Stopped")


app = FastAPI(
    title=settings.app_name,
    description="Landlord record keeping for properties, tenants, rent payments and maintenance, with automatic lease expiry.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS - configured from ALLOWED_ORIGINS
# In production, wildcard (*) is blocked by env_validation.py
logger.info(f"CORS configured with origins: {settings.cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API v1 routers
app.include_router(auth_router, prefix=settings.api_v1_prefix)
app.include_router(properties_router, prefix=settings.api_v1_prefix)
app.include_router(tenants_router, prefix=settings.api_v1_prefix)
app.include_router(rent_payments_router, prefix=settings.api_v1_prefix)
app.include_router(maintenance_router, prefix=settings.api_v1_prefix)
app.include_router(dashboard_router, prefix=settings.api_v1_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
    }
