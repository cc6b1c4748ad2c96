"""
PORTFOLIO SERVICE
Caller-facing portfolio operations over a holding store

RESPONSIBILITIES:
- Validate input before any write
- Delegate persistence to the store
- Build summaries from a single store snapshot
- Translate "no such record" results into NotFoundError

RULES:
❌ No terminal / HTTP assumptions
❌ No swallowing of store errors
✅ Fail fast, no partial writes
"""

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, List, Mapping, Optional, Protocol, Sequence

from portfolio_tracker.core.errors import NotFoundError
from portfolio_tracker.domain.models import Holding, HoldingPerformance, PortfolioSummary
from portfolio_tracker.domain.services.holding_validation import (
    require_positive,
    validate_holding_fields,
)
from portfolio_tracker.domain.services.portfolio_calculator import PortfolioCalculator
from portfolio_tracker.utils.time import now_utc_naive, today_utc

logger = logging.getLogger(__name__)


class HoldingStore(Protocol):
    """Protocol for holding data access - ASYNC"""

    async def create(self, holding: Holding) -> int:
        """Persist a new holding and return its assigned id"""
        ...

    async def get_all(self) -> Sequence[Holding]:
        """All holdings, ordered by id ascending"""
        ...

    async def get_by_id(self, holding_id: int) -> Optional[Holding]:
        """Holding by id or None"""
        ...

    async def update_price(
        self, holding_id: int, price: Decimal, updated_at: datetime
    ) -> bool:
        """Set current price and its last update time; False if absent"""
        ...

    async def update(self, holding: Holding) -> bool:
        """Replace all mutable fields; False if absent"""
        ...

    async def delete(self, holding_id: int) -> bool:
        """Remove holding; False if absent"""
        ...


class PortfolioService:
    """
    Portfolio Service - ASYNC
    Stateless apart from its collaborators
    """

    def __init__(
        self,
        store: HoldingStore,
        calculator: Optional[PortfolioCalculator] = None,
        clock: Callable[[], datetime] = now_utc_naive,
        today: Callable[[], date] = today_utc,
    ):
        """
        Initialize with store dependency

        Args:
            store: HoldingStore implementation
            calculator: PortfolioCalculator (default limits)
            clock: Source of naive UTC timestamps for price snapshots
            today: Source of the current date for purchase date checks
        """
        self.store = store
        self.calculator = calculator or PortfolioCalculator()
        self.clock = clock
        self.today = today

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    async def list_holdings(self) -> List[HoldingPerformance]:
        """Every holding with its derived metrics, in store order"""
        holdings = await self.store.get_all()
        return self.calculator.evaluate(holdings)

    async def get_holding(self, holding_id: int) -> HoldingPerformance:
        """
        Raises:
            NotFoundError: If no holding has this id
        """
        holding = await self.store.get_by_id(holding_id)
        if holding is None:
            raise NotFoundError(holding_id)
        return HoldingPerformance(
            holding=holding,
            metrics=self.calculator.compute_derived(holding),
        )

    async def get_summary(self) -> PortfolioSummary:
        """Portfolio summary from one consistent store snapshot"""
        logger.info("🔍 Building portfolio summary")
        holdings = await self.store.get_all()
        summary = self.calculator.summarize(holdings)

        logger.info(
            "✅ Portfolio summary ready | holdings=%d priced=%d invested=%s value=%s pnl=%s",
            summary.holdings_count,
            summary.holdings_with_prices,
            summary.total_invested,
            summary.current_value,
            summary.total_gain_loss,
        )
        return summary

    # ------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------

    async def add_holding(
        self,
        *,
        symbol: Any,
        asset_name: Any,
        asset_type: Any,
        quantity: Any,
        purchase_price: Any,
        purchase_date: Any,
        current_price: Optional[Any] = None,
    ) -> int:
        """
        Validate then create a holding

        Returns:
            Assigned holding id

        Raises:
            ValidationError: Before any store call
        """
        holding = validate_holding_fields(
            symbol=symbol,
            asset_name=asset_name,
            asset_type=asset_type,
            quantity=quantity,
            purchase_price=purchase_price,
            purchase_date=purchase_date,
            current_price=current_price,
            today=self.today(),
        )
        if holding.current_price is not None:
            holding = replace(holding, last_price_update=self.clock())

        holding_id = await self.store.create(holding)
        logger.info(
            "➕ Added holding %s | id=%s qty=%s @ %s",
            holding.symbol,
            holding_id,
            holding.quantity,
            holding.purchase_price,
        )
        return holding_id

    async def update_price(self, holding_id: int, price: Any) -> Holding:
        """
        Record a new price snapshot for one holding

        Raises:
            ValidationError: If price <= 0 (no store call made)
            NotFoundError: If no holding has this id
        """
        amount = require_positive("price", price)

        if not await self.store.update_price(holding_id, amount, self.clock()):
            raise NotFoundError(holding_id)

        logger.info("💹 Price updated | id=%s price=%s", holding_id, amount)
        holding = await self.store.get_by_id(holding_id)
        if holding is None:
            # Deleted between the update and the read
            raise NotFoundError(holding_id)
        return holding

    async def update_prices(self, prices: Mapping[int, Any]) -> int:
        """
        Record price snapshots for several holdings

        All prices are validated and all ids checked against one snapshot
        before the first write.

        Returns:
            Number of holdings updated
        """
        amounts = {
            holding_id: require_positive(f"price[{holding_id}]", price)
            for holding_id, price in prices.items()
        }

        known_ids = {h.id for h in await self.store.get_all()}
        missing = sorted(set(amounts) - known_ids)
        if missing:
            raise NotFoundError(
                missing[0],
                f"Holdings not found: {', '.join(str(i) for i in missing)}",
            )

        # One timestamp for the whole batch
        stamped_at = self.clock()
        for holding_id, amount in amounts.items():
            if not await self.store.update_price(holding_id, amount, stamped_at):
                raise NotFoundError(holding_id)

        logger.info("💹 Prices updated for %d holdings", len(amounts))
        return len(amounts)

    async def update_holding(
        self,
        holding_id: int,
        *,
        symbol: Any,
        asset_name: Any,
        asset_type: Any,
        quantity: Any,
        purchase_price: Any,
        purchase_date: Any,
        current_price: Optional[Any] = None,
    ) -> Holding:
        """
        Replace every field of a holding

        The existing price snapshot is kept unless current_price is given.

        Raises:
            ValidationError: Before any store call
            NotFoundError: If no holding has this id
        """
        candidate = validate_holding_fields(
            symbol=symbol,
            asset_name=asset_name,
            asset_type=asset_type,
            quantity=quantity,
            purchase_price=purchase_price,
            purchase_date=purchase_date,
            current_price=current_price,
            today=self.today(),
        )

        existing = await self.store.get_by_id(holding_id)
        if existing is None:
            raise NotFoundError(holding_id)

        if candidate.current_price is None:
            updated = replace(
                candidate,
                id=holding_id,
                current_price=existing.current_price,
                last_price_update=existing.last_price_update,
            )
        else:
            updated = replace(candidate, id=holding_id, last_price_update=self.clock())

        if not await self.store.update(updated):
            raise NotFoundError(holding_id)

        logger.info("✏️ Updated holding %s | id=%s", updated.symbol, holding_id)
        return updated

    async def delete_holding(self, holding_id: int) -> None:
        """
        Raises:
            NotFoundError: If no holding has this id
        """
        if not await self.store.delete(holding_id):
            raise NotFoundError(holding_id)
        logger.info("🗑️ Deleted holding | id=%s", holding_id)
