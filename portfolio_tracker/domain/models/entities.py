"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


class AssetType(str, Enum):
    """Closed set of supported asset types"""
    STOCK = "Stock"
    ETF = "ETF"
    CRYPTO = "Crypto"
    BOND = "Bond"

    @classmethod
    def parse(cls, value) -> "AssetType":
        """Resolve a value or case-insensitive name/value to an AssetType"""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown asset type: {value!r}")


@dataclass(frozen=True)
class Holding:
    """
    A single investment position - Immutable snapshot

    The store owns the canonical record. Any Holding handed out is a copy
    valid for the duration of one computation.
    """
    symbol: str
    asset_name: str
    asset_type: AssetType
    quantity: Decimal
    purchase_price: Decimal
    purchase_date: date
    current_price: Optional[Decimal] = None
    last_price_update: Optional[datetime] = None
    id: Optional[int] = None

    @property
    def is_priced(self) -> bool:
        """Check if a current price snapshot has been recorded"""
        return self.current_price is not None


@dataclass(frozen=True)
class DerivedMetrics:
    """
    Metrics computed on read, never stored.

    Every field except invested_value is present iff the holding is priced.
    """
    invested_value: Decimal
    current_value: Optional[Decimal] = None
    gain_loss: Optional[Decimal] = None
    gain_loss_percent: Optional[Decimal] = None


@dataclass(frozen=True)
class HoldingPerformance:
    """Holding snapshot paired with its derived metrics"""
    holding: Holding
    metrics: DerivedMetrics

    @property
    def id(self) -> Optional[int]:
        return self.holding.id

    @property
    def symbol(self) -> str:
        return self.holding.symbol

    @property
    def is_priced(self) -> bool:
        return self.holding.is_priced

    @property
    def invested_value(self) -> Decimal:
        return self.metrics.invested_value

    @property
    def current_value(self) -> Optional[Decimal]:
        return self.metrics.current_value

    @property
    def gain_loss(self) -> Optional[Decimal]:
        return self.metrics.gain_loss

    @property
    def gain_loss_percent(self) -> Optional[Decimal]:
        return self.metrics.gain_loss_percent


@dataclass(frozen=True)
class PortfolioSummary:
    """
    Portfolio-wide aggregate - Immutable, never persisted

    total_invested covers every holding; current_value, total_gain_loss and
    total_gain_loss_percent cover priced holdings only.
    """
    total_invested: Decimal
    current_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Optional[Decimal]
    holdings_count: int
    holdings_with_prices: int
    top_holdings: Tuple[HoldingPerformance, ...] = ()
    best_performer: Optional[HoldingPerformance] = None
    worst_performer: Optional[HoldingPerformance] = None

    @property
    def holdings_without_prices(self) -> int:
        """Holdings excluded from value aggregates"""
        return self.holdings_count - self.holdings_with_prices
