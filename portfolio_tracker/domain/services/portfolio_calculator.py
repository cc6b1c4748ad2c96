"""
PORTFOLIO CALCULATOR
Derive per-holding and portfolio-wide metrics from holding snapshots

RESPONSIBILITIES:
- Compute invested value, current value and gain/loss per holding
- Aggregate a portfolio summary
- Rank holdings by value and by performance

RULES:
❌ No database access
❌ No price fetching
❌ No float arithmetic
✅ Unpriced holdings count toward invested capital only
✅ Gain/loss measured against priced invested capital only
✅ Deterministic ordering (ties broken by ascending id)
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from portfolio_tracker.domain.models import (
    DerivedMetrics,
    Holding,
    HoldingPerformance,
    PortfolioSummary,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
DEFAULT_TOP_HOLDINGS_LIMIT = 5


def _id_key(performance: HoldingPerformance) -> int:
    # Unsaved holdings sort last
    holding_id = performance.id
    return holding_id if holding_id is not None else 2**63


class PortfolioCalculator:
    """
    Portfolio Calculator
    Stateless; safe to share across callers
    """

    def __init__(self, top_holdings_limit: int = DEFAULT_TOP_HOLDINGS_LIMIT):
        """
        Initialize portfolio calculator

        Args:
            top_holdings_limit: Maximum number of holdings in top_holdings
        """
        if top_holdings_limit < 0:
            raise ValueError("top_holdings_limit cannot be negative")
        self.top_holdings_limit = top_holdings_limit

    @staticmethod
    def compute_derived(holding: Holding) -> DerivedMetrics:
        """
        Compute derived metrics for one holding

        Args:
            holding: Validated holding snapshot

        Returns:
            DerivedMetrics; current_value, gain_loss and gain_loss_percent
            are None when the holding has no current price
        """
        invested_value = holding.quantity * holding.purchase_price

        if holding.current_price is None:
            return DerivedMetrics(invested_value=invested_value)

        current_value = holding.quantity * holding.current_price
        gain_loss = current_value - invested_value
        gain_loss_percent = gain_loss / invested_value * HUNDRED

        return DerivedMetrics(
            invested_value=invested_value,
            current_value=current_value,
            gain_loss=gain_loss,
            gain_loss_percent=gain_loss_percent,
        )

    def evaluate(self, holdings: Iterable[Holding]) -> List[HoldingPerformance]:
        """Pair every holding with its derived metrics, preserving order"""
        return [
            HoldingPerformance(holding=h, metrics=self.compute_derived(h))
            for h in holdings
        ]

    def summarize(self, holdings: Iterable[Holding]) -> PortfolioSummary:
        """
        Aggregate holdings into a portfolio summary

        Args:
            holdings: One consistent snapshot of all holdings

        Returns:
            Immutable PortfolioSummary
        """
        performances = self.evaluate(holdings)
        priced = [p for p in performances if p.is_priced]

        total_invested = sum((p.invested_value for p in performances), ZERO)
        priced_invested = sum((p.invested_value for p in priced), ZERO)
        current_value = sum((p.current_value for p in priced), ZERO)
        total_gain_loss = current_value - priced_invested

        total_gain_loss_percent: Optional[Decimal] = None
        if priced_invested > ZERO:
            total_gain_loss_percent = total_gain_loss / priced_invested * HUNDRED

        summary = PortfolioSummary(
            total_invested=total_invested,
            current_value=current_value,
            total_gain_loss=total_gain_loss,
            total_gain_loss_percent=total_gain_loss_percent,
            holdings_count=len(performances),
            holdings_with_prices=len(priced),
            top_holdings=tuple(self.rank_by_value(priced)),
            best_performer=self.best_performer(priced),
            worst_performer=self.worst_performer(priced),
        )

        logger.debug(
            "Summary computed | holdings=%d priced=%d invested=%s value=%s",
            summary.holdings_count,
            summary.holdings_with_prices,
            summary.total_invested,
            summary.current_value,
        )
        return summary

    def rank_by_value(
        self,
        performances: Iterable[HoldingPerformance],
    ) -> List[HoldingPerformance]:
        """
        Priced holdings by current value descending, truncated to the limit
        """
        priced = [p for p in performances if p.is_priced]
        ranked = sorted(priced, key=lambda p: (-p.current_value, _id_key(p)))
        return ranked[: self.top_holdings_limit]

    @staticmethod
    def best_performer(
        performances: Iterable[HoldingPerformance],
    ) -> Optional[HoldingPerformance]:
        """Priced holding with the highest gain/loss percent"""
        priced = [p for p in performances if p.is_priced]
        if not priced:
            return None
        return min(priced, key=lambda p: (-p.gain_loss_percent, _id_key(p)))

    @staticmethod
    def worst_performer(
        performances: Iterable[HoldingPerformance],
    ) -> Optional[HoldingPerformance]:
        """Priced holding with the lowest gain/loss percent"""
        priced = [p for p in performances if p.is_priced]
        if not priced:
            return None
        return min(priced, key=lambda p: (p.gain_loss_percent, _id_key(p)))
