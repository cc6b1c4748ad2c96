"""
Shared FastAPI dependencies and error mapping for the API routes.
"""

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_tracker.config import settings
from portfolio_tracker.core.errors import (
    NotFoundError,
    PersistenceError,
    PortfolioError,
    ValidationError,
)
from portfolio_tracker.domain.services.portfolio_calculator import PortfolioCalculator
from portfolio_tracker.domain.services.portfolio_service import PortfolioService
from portfolio_tracker.infrastructure.db.database import get_db
from portfolio_tracker.infrastructure.db.repositories.holding_repository import HoldingRepository


def get_portfolio_service(db: AsyncSession = Depends(get_db)) -> PortfolioService:
    return PortfolioService(
        store=HoldingRepository(db),
        calculator=PortfolioCalculator(top_holdings_limit=settings.TOP_HOLDINGS_LIMIT),
    )


def to_http_exception(error: PortfolioError) -> HTTPException:
    """Map domain errors to HTTP responses"""
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=400,
            detail={"field": error.field, "message": error.message},
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, PersistenceError):
        return HTTPException(status_code=503, detail=f"Storage unavailable: {error}")
    return HTTPException(status_code=500, detail=str(error))
