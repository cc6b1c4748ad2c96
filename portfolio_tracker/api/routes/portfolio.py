"""
Portfolio API Routes
Portfolio-level summary over all holdings
"""

import logging

from fastapi import APIRouter, Depends

from portfolio_tracker.api.dependencies import get_portfolio_service, to_http_exception
from portfolio_tracker.core.errors import PortfolioError
from portfolio_tracker.domain.schemas.portfolio import PortfolioSummaryResponse
from portfolio_tracker.domain.services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/summary", response_model=PortfolioSummaryResponse)
async def get_portfolio_summary(service: PortfolioService = Depends(get_portfolio_service)):
    """
    Get portfolio summary

    Returns invested capital across all holdings, value and gain/loss
    across priced holdings, top holdings by value and best/worst performers
    """
    try:
        summary = await service.get_summary()
    except PortfolioError as e:
        logger.error(f"Error building portfolio summary: {e}")
        raise to_http_exception(e) from e
    return PortfolioSummaryResponse.from_summary(summary)
