"""
Request / Response schemas for holdings and portfolio summaries.
Totals and percentages are rounded to 2 places on the way out; unit prices
and quantities are returned at full stored precision.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from portfolio_tracker.domain.models import HoldingPerformance, PortfolioSummary
from portfolio_tracker.utils.time import to_utc_iso


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(round(value, 2)) if value is not None else None


def _exact(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


class HoldingFieldsRequest(BaseModel):
    """Full set of caller-supplied holding fields"""
    symbol: str = Field(..., description="Ticker symbol, stored upper-case")
    asset_name: str = Field(..., description="Free-text asset description")
    asset_type: str = Field(..., description="Stock, ETF, Crypto or Bond")
    quantity: Decimal = Field(..., description="Units held (fractional allowed)")
    purchase_price: Decimal = Field(..., description="Price paid per unit")
    purchase_date: date = Field(..., description="Purchase date (YYYY-MM-DD)")
    current_price: Optional[Decimal] = Field(None, description="Optional current price snapshot")


class PriceUpdateRequest(BaseModel):
    price: Decimal = Field(..., description="New current price per unit")


class BulkPriceUpdateRequest(BaseModel):
    prices: Dict[int, Decimal] = Field(..., description="Holding id → new current price")


class BulkPriceUpdateResponse(BaseModel):
    updated: int


class HoldingResponse(BaseModel):
    id: int
    symbol: str
    asset_name: str
    asset_type: str
    quantity: float
    purchase_price: float
    purchase_date: date
    current_price: Optional[float]
    last_price_update: Optional[str]
    invested_value: float
    current_value: Optional[float]
    gain_loss: Optional[float]
    gain_loss_percent: Optional[float]

    @classmethod
    def from_performance(cls, performance: HoldingPerformance) -> "HoldingResponse":
        holding = performance.holding
        return cls(
            id=holding.id,
            symbol=holding.symbol,
            asset_name=holding.asset_name,
            asset_type=holding.asset_type.value,
            quantity=_exact(holding.quantity),
            purchase_price=_exact(holding.purchase_price),
            purchase_date=holding.purchase_date,
            current_price=_exact(holding.current_price),
            last_price_update=(
                to_utc_iso(holding.last_price_update)
                if holding.last_price_update
                else None
            ),
            invested_value=_money(performance.invested_value),
            current_value=_money(performance.current_value),
            gain_loss=_money(performance.gain_loss),
            gain_loss_percent=_money(performance.gain_loss_percent),
        )


class PortfolioSummaryResponse(BaseModel):
    total_invested: float
    current_value: float
    total_gain_loss: float
    total_gain_loss_percent: Optional[float]
    holdings_count: int
    holdings_with_prices: int
    holdings_without_prices: int
    top_holdings: List[HoldingResponse]
    best_performer: Optional[HoldingResponse] = None
    worst_performer: Optional[HoldingResponse] = None

    @classmethod
    def from_summary(cls, summary: PortfolioSummary) -> "PortfolioSummaryResponse":
        return cls(
            total_invested=_money(summary.total_invested),
            current_value=_money(summary.current_value),
            total_gain_loss=_money(summary.total_gain_loss),
            total_gain_loss_percent=_money(summary.total_gain_loss_percent),
            holdings_count=summary.holdings_count,
            holdings_with_prices=summary.holdings_with_prices,
            holdings_without_prices=summary.holdings_without_prices,
            top_holdings=[HoldingResponse.from_performance(p) for p in summary.top_holdings],
            best_performer=(
                HoldingResponse.from_performance(summary.best_performer)
                if summary.best_performer
                else None
            ),
            worst_performer=(
                HoldingResponse.from_performance(summary.worst_performer)
                if summary.worst_performer
                else None
            ),
        )
