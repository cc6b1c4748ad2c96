"""
Holding field validation.
Fail-fast checks applied before anything reaches the store.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from portfolio_tracker.core.errors import ValidationError
from portfolio_tracker.domain.models import AssetType, Holding

# Storage limits shared with the holdings table
SYMBOL_MAX_LENGTH = 20
ASSET_NAME_MAX_LENGTH = 200
AMOUNT_PRECISION = 18
AMOUNT_SCALE = 8


def require_text(field: str, value: Any, max_length: Optional[int] = None) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(field, "cannot be empty")
    if max_length is not None and len(text) > max_length:
        raise ValidationError(field, f"cannot be longer than {max_length} characters")
    return text


def require_positive(
    field: str,
    value: Any,
    scale: int = AMOUNT_SCALE,
    precision: int = AMOUNT_PRECISION,
) -> Decimal:
    """
    Coerce to Decimal and require a finite value > 0 that the store can
    hold exactly (at most `scale` decimal places, `precision` digits)
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(field, "must be a positive number")
    try:
        # str() keeps floats from dragging binary noise into Decimal
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(field, f"is not a number: {value!r}")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(field, "must be greater than zero")
    if amount.normalize().as_tuple().exponent < -scale:
        raise ValidationError(field, f"supports at most {scale} decimal places")
    if amount >= Decimal(10) ** (precision - scale):
        raise ValidationError(field, f"must be less than 10^{precision - scale}")
    return amount


def require_asset_type(value: Any) -> AssetType:
    try:
        return AssetType.parse(value)
    except ValueError:
        allowed = ", ".join(t.value for t in AssetType)
        raise ValidationError("asset_type", f"must be one of {allowed}")


def require_past_date(field: str, value: Any, today: date) -> date:
    if isinstance(value, datetime):
        value = value.date()
    elif isinstance(value, str):
        try:
            value = date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(field, "must be a date in YYYY-MM-DD format")
    if not isinstance(value, date):
        raise ValidationError(field, "must be a date")
    if value > today:
        raise ValidationError(field, "cannot be in the future")
    return value


def validate_holding_fields(
    *,
    symbol: Any,
    asset_name: Any,
    asset_type: Any,
    quantity: Any,
    purchase_price: Any,
    purchase_date: Any,
    today: date,
    current_price: Optional[Any] = None,
) -> Holding:
    """
    Validate raw fields and build an unsaved Holding

    Symbols are upper-cased. current_price is optional; the caller stamps
    last_price_update when it is present.

    Raises:
        ValidationError: naming the first offending field
    """
    return Holding(
        symbol=require_text("symbol", symbol, SYMBOL_MAX_LENGTH).upper(),
        asset_name=require_text("asset_name", asset_name, ASSET_NAME_MAX_LENGTH),
        asset_type=require_asset_type(asset_type),
        quantity=require_positive("quantity", quantity),
        purchase_price=require_positive("purchase_price", purchase_price),
        purchase_date=require_past_date("purchase_date", purchase_date, today),
        current_price=(
            require_positive("current_price", current_price)
            if current_price is not None
            else None
        ),
    )
