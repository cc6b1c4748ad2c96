"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    AssetType,

    # Entities
    DerivedMetrics,
    Holding,
    HoldingPerformance,
    PortfolioSummary,
)

__all__ = [
    # Enums
    "AssetType",

    # Entities
    "DerivedMetrics",
    "Holding",
    "HoldingPerformance",
    "PortfolioSummary",
]
