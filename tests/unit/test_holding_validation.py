from datetime import date, datetime
from decimal import Decimal

import pytest

from portfolio_tracker.core.errors import ValidationError
from portfolio_tracker.domain.models import AssetType
from portfolio_tracker.domain.services.holding_validation import (
    AMOUNT_SCALE,
    SYMBOL_MAX_LENGTH,
    require_asset_type,
    require_past_date,
    require_positive,
    require_text,
    validate_holding_fields,
)


def test_symbol_is_normalized_to_upper_case():
    holding = validate_holding_fields(
        symbol="  btc ",
        asset_name=" Bitcoin ",
        asset_type="crypto",
        quantity="0.00250000",
        purchase_price=42000.5,
        purchase_date="2025-03-01",
        today=date(2026, 1, 1),
    )

    assert holding.symbol == "BTC"
    assert holding.asset_name == "Bitcoin"
    assert holding.asset_type == AssetType.CRYPTO
    assert holding.quantity == Decimal("0.0025")
    assert holding.purchase_price == Decimal("42000.5")
    assert holding.purchase_date == date(2025, 3, 1)
    assert holding.id is None


@pytest.mark.parametrize("value", ["Stock", "STOCK", "etf", AssetType.BOND, "Crypto"])
def test_asset_type_accepts_known_values(value):
    assert isinstance(require_asset_type(value), AssetType)


@pytest.mark.parametrize("value", [0, -1, "0", "NaN", "Infinity", None, True, "ten"])
def test_require_positive_rejects(value):
    with pytest.raises(ValidationError) as exc_info:
        require_positive("quantity", value)
    assert exc_info.value.field == "quantity"


def test_float_input_does_not_leak_binary_noise():
    assert require_positive("price", 0.1) == Decimal("0.1")


def test_datetime_purchase_date_uses_calendar_day():
    today = date(2026, 2, 4)
    assert require_past_date("purchase_date", datetime(2026, 2, 4, 23, 59), today) == today


def test_future_purchase_date_rejected():
    with pytest.raises(ValidationError) as exc_info:
        require_past_date("purchase_date", "2026-02-05", date(2026, 2, 4))
    assert "future" in exc_info.value.message


def test_malformed_purchase_date_rejected():
    with pytest.raises(ValidationError):
        require_past_date("purchase_date", "04/02/2026", date(2026, 2, 4))


@pytest.mark.parametrize("value", ["0.123456789", "0.000000001", "10000000000", "1e10"])
def test_require_positive_rejects_values_the_store_cannot_hold(value):
    with pytest.raises(ValidationError) as exc_info:
        require_positive("quantity", value)
    assert exc_info.value.field == "quantity"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0.00001", Decimal("0.00001")),
        ("0.12345678", Decimal("0.12345678")),
        ("1.500000000000", Decimal("1.5")),
        ("9999999999.99999999", Decimal("9999999999.99999999")),
    ],
)
def test_require_positive_accepts_values_within_storage_scale(value, expected):
    assert require_positive("price", value) == expected


def test_scale_message_names_the_limit():
    with pytest.raises(ValidationError) as exc_info:
        require_positive("quantity", "1.123456789")
    assert str(AMOUNT_SCALE) in exc_info.value.message


def test_text_longer_than_limit_rejected():
    assert require_text("symbol", "X" * SYMBOL_MAX_LENGTH) == "X" * SYMBOL_MAX_LENGTH
    with pytest.raises(ValidationError) as exc_info:
        require_text("symbol", "X" * (SYMBOL_MAX_LENGTH + 1), SYMBOL_MAX_LENGTH)
    assert exc_info.value.field == "symbol"
