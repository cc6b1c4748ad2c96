"""
Database Models (SQLAlchemy ORM)
Column names and types form the durable schema contract for holdings
"""

from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Index

from portfolio_tracker.domain.services.holding_validation import (
    AMOUNT_PRECISION,
    AMOUNT_SCALE,
    ASSET_NAME_MAX_LENGTH,
    SYMBOL_MAX_LENGTH,
)
from portfolio_tracker.infrastructure.db.database import Base
from portfolio_tracker.utils.time import now_utc_naive


class HoldingModel(Base):
    """Investment holding"""
    __tablename__ = "holdings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    symbol = Column(String(SYMBOL_MAX_LENGTH), nullable=False, index=True)
    asset_name = Column(String(ASSET_NAME_MAX_LENGTH), nullable=False)
    asset_type = Column(String(10), nullable=False)  # Stock, ETF, Crypto, Bond

    quantity = Column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=False)
    purchase_price = Column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=False)
    purchase_date = Column(Date, nullable=False)

    current_price = Column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=True)
    last_price_update = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Indexes
    __table_args__ = (
        Index('ix_holdings_asset_type', 'asset_type'),
    )
