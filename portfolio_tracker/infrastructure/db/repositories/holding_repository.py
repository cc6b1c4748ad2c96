"""
Holding Repository
CRUD operations for investment holdings
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_tracker.core.errors import PersistenceError
from portfolio_tracker.domain.models import AssetType, Holding
from portfolio_tracker.infrastructure.db.models import HoldingModel

logger = logging.getLogger(__name__)


class HoldingRepository:
    """Repository for Holding"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def create(self, holding: Holding) -> int:
        """
        Create new holding record

        Args:
            holding: Holding domain object (id is ignored)

        Returns:
            ID of created record
        """
        model = HoldingModel(
            symbol=holding.symbol,
            asset_name=holding.asset_name,
            asset_type=holding.asset_type.value,
            quantity=holding.quantity,
            purchase_price=holding.purchase_price,
            purchase_date=holding.purchase_date,
            current_price=holding.current_price,
            last_price_update=holding.last_price_update,
        )

        try:
            self.session.add(model)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to create holding {holding.symbol}: {e}")
            raise PersistenceError(f"Failed to create holding: {e}") from e

        return model.id

    async def get_all(self) -> List[Holding]:
        """
        Get all holdings

        Returns:
            List of Holdings ordered by id ascending
        """
        try:
            result = await self.session.execute(
                select(HoldingModel).order_by(HoldingModel.id)
            )
            models = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read holdings: {e}")
            raise PersistenceError(f"Failed to read holdings: {e}") from e

        return [self._to_domain(m) for m in models]

    async def get_by_id(self, holding_id: int) -> Optional[Holding]:
        """
        Get holding by id

        Returns:
            Holding or None
        """
        model = await self._get_model(holding_id)
        return self._to_domain(model) if model else None

    async def update_price(
        self, holding_id: int, price: Decimal, updated_at: datetime
    ) -> bool:
        """
        Set current price and last_price_update

        Args:
            updated_at: Naive UTC time of the price snapshot

        Returns:
            False if the holding does not exist
        """
        model = await self._get_model(holding_id)
        if model is None:
            return False

        model.current_price = price
        model.last_price_update = updated_at
        await self._flush("update price", holding_id)
        return True

    async def update(self, holding: Holding) -> bool:
        """
        Replace all mutable fields of an existing holding

        Returns:
            False if the holding does not exist
        """
        model = await self._get_model(holding.id)
        if model is None:
            return False

        model.symbol = holding.symbol
        model.asset_name = holding.asset_name
        model.asset_type = holding.asset_type.value
        model.quantity = holding.quantity
        model.purchase_price = holding.purchase_price
        model.purchase_date = holding.purchase_date
        model.current_price = holding.current_price
        model.last_price_update = holding.last_price_update
        await self._flush("update", holding.id)
        return True

    async def delete(self, holding_id: int) -> bool:
        """
        Delete holding

        Returns:
            False if the holding does not exist
        """
        model = await self._get_model(holding_id)
        if model is None:
            return False

        try:
            await self.session.delete(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete holding {holding_id}: {e}")
            raise PersistenceError(f"Failed to delete holding {holding_id}: {e}") from e
        await self._flush("delete", holding_id)
        return True

    async def _get_model(self, holding_id: Optional[int]) -> Optional[HoldingModel]:
        if holding_id is None:
            return None
        try:
            return await self.session.get(HoldingModel, holding_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read holding {holding_id}: {e}")
            raise PersistenceError(f"Failed to read holding {holding_id}: {e}") from e

    async def _flush(self, action: str, holding_id: Optional[int]) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action} holding {holding_id}: {e}")
            raise PersistenceError(f"Failed to {action} holding {holding_id}: {e}") from e

    @staticmethod
    def _to_domain(model: HoldingModel) -> Holding:
        """Convert database model to domain entity"""
        return Holding(
            id=model.id,
            symbol=model.symbol,
            asset_name=model.asset_name,
            asset_type=AssetType(model.asset_type),
            quantity=Decimal(str(model.quantity)),
            purchase_price=Decimal(str(model.purchase_price)),
            purchase_date=model.purchase_date,
            current_price=(
                Decimal(str(model.current_price))
                if model.current_price is not None
                else None
            ),
            last_price_update=model.last_price_update,
        )
