"""
Error taxonomy shared by the domain, storage and API layers.
"""

from typing import Optional


class PortfolioError(Exception):
    """Base class for all portfolio tracker errors"""


class ValidationError(PortfolioError):
    """Caller-supplied field failed an invariant. Raised before any write."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NotFoundError(PortfolioError):
    """Referenced holding does not exist"""

    def __init__(self, holding_id: int, message: Optional[str] = None):
        self.holding_id = holding_id
        super().__init__(message or f"Holding {holding_id} not found")


class PersistenceError(PortfolioError):
    """Storage medium is unreachable or rejected the operation"""
