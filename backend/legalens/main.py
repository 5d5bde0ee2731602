"""
FastAPI Application - Legalens Backend
Main application entry point with logging, CORS and router configuration.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legalens.config import get_settings
from legalens.database import create_tables, get_session_factory
from legalens.routers import auth, documents, contracts, profile
from legalens.services.ai_service import AIService
from legalens.services.analysis_queue import AnalysisQueue
from legalens.services.reconciler import reconcile_stale_analyses


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    current = get_settings()
    create_tables()
    reconcile_stale_analyses(
        get_session_factory(),
        max_age=timedelta(minutes=current.stale_analysis_minutes)
    )
    app.state.ai_service = AIService(current)
    app.state.analysis_queue = AnalysisQueue()
    logger.info("Legalens API started")
    yield
    # Shutdown: let in-flight analyses record their result; the reconciler
    # picks up whatever had to be cancelled on the next start
    await app.state.analysis_queue.shutdown(timeout=current.shutdown_grace_seconds)


app = FastAPI(
    title="Legalens API",
    description="Backend API for AI-powered contract risk analysis and drafting",
    version="1.0.0",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])
app.include_router(contracts.router, prefix="/api/contracts", tags=["Contracts"])
app.include_router(profile.router, prefix="/api/profile", tags=["Profile"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Legalens API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
