from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from portfolio_tracker.core.errors import PersistenceError
from portfolio_tracker.domain.models import AssetType, Holding
from portfolio_tracker.infrastructure.db.repositories.holding_repository import HoldingRepository
from portfolio_tracker.utils.time import now_utc_naive


def sample_holding(**overrides):
    fields = dict(
        symbol="VTI",
        asset_name="Vanguard Total Stock Market ETF",
        asset_type=AssetType.ETF,
        quantity=Decimal("12.5"),
        purchase_price=Decimal("210.25"),
        purchase_date=date(2025, 3, 14),
    )
    fields.update(overrides)
    return Holding(**fields)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_then_get_by_id_roundtrip(db_session):
    repo = HoldingRepository(db_session)
    holding = sample_holding()

    holding_id = await repo.create(holding)
    await db_session.commit()

    fetched = await repo.get_by_id(holding_id)
    assert fetched is not None
    assert fetched.id == holding_id
    assert fetched == sample_holding(id=holding_id)
    assert fetched.current_price is None
    assert fetched.last_price_update is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_fractional_amounts_survive_storage(db_session):
    repo = HoldingRepository(db_session)
    holding = sample_holding(
        symbol="SHIB",
        asset_name="Shiba Inu",
        asset_type=AssetType.CRYPTO,
        quantity=Decimal("1234567.12345678"),
        purchase_price=Decimal("0.00000812"),
        current_price=Decimal("0.00001"),
        last_price_update=datetime(2026, 2, 4, 10, 0),
    )

    holding_id = await repo.create(holding)
    await db_session.commit()
    db_session.expunge_all()

    fetched = await repo.get_by_id(holding_id)
    assert fetched.quantity == Decimal("1234567.12345678")
    assert fetched.purchase_price == Decimal("0.00000812")
    assert fetched.current_price == Decimal("0.00001")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_all_ordered_by_id(db_session):
    repo = HoldingRepository(db_session)
    ids = [
        await repo.create(sample_holding(symbol=symbol))
        for symbol in ("VTI", "BTC", "VTI")
    ]

    holdings = await repo.get_all()

    assert [h.id for h in holdings] == sorted(ids)
    assert [h.symbol for h in holdings] == ["VTI", "BTC", "VTI"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_all_empty(db_session):
    assert await HoldingRepository(db_session).get_all() == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_price_stores_given_timestamp(db_session):
    repo = HoldingRepository(db_session)
    holding_id = await repo.create(sample_holding())
    stamped_at = now_utc_naive()

    assert await repo.update_price(holding_id, Decimal("225.5"), stamped_at) is True

    fetched = await repo.get_by_id(holding_id)
    assert fetched.current_price == Decimal("225.5")
    assert fetched.last_price_update == stamped_at


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_price_unknown_id(db_session):
    repo = HoldingRepository(db_session)
    await repo.create(sample_holding())

    assert await repo.update_price(999, Decimal("10"), now_utc_naive()) is False
    assert (await repo.get_all())[0].current_price is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_full_update(db_session):
    repo = HoldingRepository(db_session)
    holding_id = await repo.create(sample_holding())

    changed = sample_holding(
        id=holding_id,
        symbol="VOO",
        asset_name="Vanguard S&P 500 ETF",
        quantity=Decimal("3"),
        current_price=Decimal("480"),
        last_price_update=datetime(2026, 2, 4, 10, 0),
    )
    assert await repo.update(changed) is True
    assert await repo.get_by_id(holding_id) == changed

    assert await repo.update(sample_holding(id=12345)) is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete(db_session):
    repo = HoldingRepository(db_session)
    holding_id = await repo.create(sample_holding())

    assert await repo.delete(holding_id) is True
    assert await repo.get_by_id(holding_id) is None
    assert await repo.delete(holding_id) is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_storage_failure_raises_persistence_error(db_session, monkeypatch):
    repo = HoldingRepository(db_session)

    async def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "execute", broken_execute)

    with pytest.raises(PersistenceError) as exc_info:
        await repo.get_all()
    assert isinstance(exc_info.value.__cause__, OperationalError)
