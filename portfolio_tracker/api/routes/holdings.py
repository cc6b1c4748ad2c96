"""
Holdings API Routes
Add, list, reprice, update and delete holdings
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from portfolio_tracker.api.dependencies import get_portfolio_service, to_http_exception
from portfolio_tracker.core.errors import PortfolioError
from portfolio_tracker.domain.schemas.portfolio import (
    BulkPriceUpdateRequest,
    BulkPriceUpdateResponse,
    HoldingFieldsRequest,
    HoldingResponse,
    PriceUpdateRequest,
)
from portfolio_tracker.domain.services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[HoldingResponse])
async def list_holdings(service: PortfolioService = Depends(get_portfolio_service)):
    """
    Get all holdings with derived values

    Unpriced holdings report null current value and gain/loss
    """
    try:
        performances = await service.list_holdings()
    except PortfolioError as e:
        logger.error(f"Error listing holdings: {e}")
        raise to_http_exception(e) from e
    return [HoldingResponse.from_performance(p) for p in performances]


@router.post("", response_model=HoldingResponse, status_code=201)
async def add_holding(
    request: HoldingFieldsRequest,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Add a new holding"""
    try:
        holding_id = await service.add_holding(**request.model_dump())
        performance = await service.get_holding(holding_id)
    except PortfolioError as e:
        logger.warning(f"Add holding rejected: {e}")
        raise to_http_exception(e) from e
    return HoldingResponse.from_performance(performance)


@router.put("/prices", response_model=BulkPriceUpdateResponse)
async def update_prices(
    request: BulkPriceUpdateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Update current prices for several holdings at once"""
    try:
        updated = await service.update_prices(request.prices)
    except PortfolioError as e:
        logger.warning(f"Bulk price update rejected: {e}")
        raise to_http_exception(e) from e
    return BulkPriceUpdateResponse(updated=updated)


@router.get("/{holding_id}", response_model=HoldingResponse)
async def get_holding(
    holding_id: int,
    service: PortfolioService = Depends(get_portfolio_service),
):
    try:
        performance = await service.get_holding(holding_id)
    except PortfolioError as e:
        raise to_http_exception(e) from e
    return HoldingResponse.from_performance(performance)


@router.put("/{holding_id}", response_model=HoldingResponse)
async def update_holding(
    holding_id: int,
    request: HoldingFieldsRequest,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Replace every field of a holding"""
    try:
        await service.update_holding(holding_id, **request.model_dump())
        performance = await service.get_holding(holding_id)
    except PortfolioError as e:
        logger.warning(f"Update of holding {holding_id} rejected: {e}")
        raise to_http_exception(e) from e
    return HoldingResponse.from_performance(performance)


@router.put("/{holding_id}/price", response_model=HoldingResponse)
async def update_price(
    holding_id: int,
    request: PriceUpdateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Record a new current price for one holding"""
    try:
        await service.update_price(holding_id, request.price)
        performance = await service.get_holding(holding_id)
    except PortfolioError as e:
        logger.warning(f"Price update for holding {holding_id} rejected: {e}")
        raise to_http_exception(e) from e
    return HoldingResponse.from_performance(performance)


@router.delete("/{holding_id}", status_code=204)
async def delete_holding(
    holding_id: int,
    service: PortfolioService = Depends(get_portfolio_service),
):
    try:
        await service.delete_holding(holding_id)
    except PortfolioError as e:
        raise to_http_exception(e) from e
    return Response(status_code=204)
