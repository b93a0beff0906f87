"""
Haady API - FastAPI application.

Uses Supabase Auth; every route answers with the {ok, data | error} envelope.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from haady import __version__
from haady.config import settings
from haady.logging_setup import setup_logging
from haady.web.onboarding_routes import router as onboarding_router
from haady.web.preference_routes import router as preference_router
from haady.web.profile_routes import router as profile_router
from haady.web.responses import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and log configuration on startup."""
    setup_logging(settings.log_level)
    logger.info("Haady API starting up...")
    logger.info(f"  Environment: {settings.haady_env}")
    logger.info(f"  Supabase: {settings.supabase_url}")
    yield
    logger.info("Haady API shutting down")


app = FastAPI(title="Haady", version=__version__, lifespan=lifespan)

# CORS middleware for the Next.js frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(onboarding_router, prefix="/api")
app.include_router(profile_router, prefix="/api")
app.include_router(preference_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
