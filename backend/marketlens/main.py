"""
MarketLens Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketlens.core.config import settings
from marketlens.api.v1 import router as api_v1_router
from marketlens.services.data_ingestion import close_data_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Data provider: {settings.data_provider.value}")
    logger.info(
        f"Policies: phase={settings.phase_policy.value}, "
        f"prediction={settings.prediction_policy.value}"
    )

    yield

    # Shutdown
    logger.info("Shutting down...")
    await close_data_provider()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    MarketLens Market Assessment API

    ## Pipeline
    - **Data Provider**: Price/volume history, social sentiment, news
    - **Technical Signals**: Indicators and volume profile (pure Python/NumPy)
    - **Trend Model**: Trend-strength estimate from indicator features
    - **Market Phase**: Phase, strength, confidence and key levels
    - **Predictions / Risk / Strategy**: Price ranges, risk factors, trade plan

    ## Core Principles
    - Every request returns a complete report
    - Default reports are flagged, never silent
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "MarketLens Backend API",
        "docs": "/docs",
        "health": "/health",
    }
