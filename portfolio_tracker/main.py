"""
FastAPI Main Application
Holdings storage and portfolio analytics over HTTP
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from portfolio_tracker import __version__
from portfolio_tracker.api.routes import health, holdings, portfolio
from portfolio_tracker.config import settings
from portfolio_tracker.core.logging import setup_logging
from portfolio_tracker.infrastructure.db.database import DATABASE_URL, init_db, close_db
from portfolio_tracker.utils.logging_redaction import install_redaction_filter

# Configure logging
setup_logging(settings.LOG_LEVEL)
install_redaction_filter()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of the database
    """
    logger.info("=" * 60)
    logger.info("🚀 Starting Portfolio Tracker")
    logger.info("=" * 60)

    logger.info(f"📊 Initializing database: {DATABASE_URL}")
    await init_db()
    logger.info("✅ Database initialized")
    logger.info(f"   ✅ API Server: http://{settings.API_HOST}:{settings.API_PORT}")
    logger.info(f"   ✅ API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")

    yield

    logger.info("📊 Closing database connections...")
    await close_db()
    logger.info("👋 Portfolio Tracker shutdown complete")


def create_app() -> FastAPI:
    """Build the FastAPI application with all routers mounted"""
    application = FastAPI(
        title="Investment Portfolio Tracker",
        description="Track holdings and compute portfolio value and performance",
        version=__version__,
        lifespan=lifespan,
    )
    application.include_router(health.router, tags=["Health"])
    application.include_router(holdings.router, prefix="/api/v1/holdings", tags=["Holdings"])
    application.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("portfolio_tracker.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
