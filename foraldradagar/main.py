# foraldradagar/main.py
"""
FastAPI application entry point.
"""

import os
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from foraldradagar.core.logging_config import get_logger, setup_logging
from foraldradagar.core.request_logging import RequestLoggingMiddleware
from foraldradagar.core.rules import get_rules
from foraldradagar.core.sentry_config import init_sentry
from foraldradagar.core.storage import available_rule_years
from foraldradagar.database.database import create_tables, get_db
from foraldradagar.routes.advisor import router as advisor_router
from foraldradagar.routes.families import router as families_router
from foraldradagar.routes.ical import router as ical_router
from foraldradagar.routes.rules import router as rules_router
from foraldradagar.routes.scenarios import router as scenarios_router

VERSION = "0.1.0"

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

# Initialize Sentry for error tracking (production only)
sentry_enabled = init_sentry()


def validate_rule_tables():
    """
    Validate that every bundled rule table loads and passes its invariants.

    Raises:
        RuntimeError: If no rule tables exist
        StorageError: If a table is unreadable or invalid
    """
    years = available_rule_years()
    if not years:
        raise RuntimeError("No rule tables found in foraldradagar/data/rules")

    for year in years:
        get_rules(year)

    logger.info(f"Rule tables validated for years: {years}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={
            "extra_fields": {
                "production": os.getenv("PRODUCTION", "false").lower() == "true",
                "python_version": sys.version,
            }
        },
    )

    try:
        validate_rule_tables()
    except Exception as e:
        logger.error(f"Rule table validation failed: {e}", exc_info=True)
        raise

    try:
        create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)
        raise

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="Föräldradagar",
    description="Planering av föräldrapenning: dagsaldon, ersättning, deadlines och planer",
    version=VERSION,
    lifespan=lifespan,
)

# CORS Configuration
IS_PRODUCTION = os.getenv("PRODUCTION", "false").lower() == "true"
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]

if IS_PRODUCTION:
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if you need to allow specific origins."
        )

    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST", "DELETE"]

    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    allowed_origins = ["*"]
    allowed_methods = ["*"]

    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(families_router)
app.include_router(scenarios_router)
app.include_router(advisor_router)
app.include_router(ical_router)
app.include_router(rules_router)


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns 200 OK if the database answers, 503 otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
        return JSONResponse(
            status_code=200,
            content={
                "status": "healthy",
                "service": "foraldradagar",
                "version": VERSION,
                "database": "connected",
                "rule_years": available_rule_years(),
            },
        )
    except Exception as e:
        logger.error(f"Health check failed - database connection error: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "service": "foraldradagar",
                "database": "disconnected",
                "error": "Database connection failed",
            },
        ) from e
