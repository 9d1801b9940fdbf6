"""
Domain models and value objects.

Contains oracle state records, change records and collaborator interfaces.
"""

from src.core.domain.change_records import (
    AnyChangeRecord,
    ChangeRecord,
    LimitsUpdated,
    LinearDiscountUpdated,
    ManagerUpdated,
)
from src.core.domain.interfaces import MaturingToken, PriceSource
from src.core.domain.oracle_state import (
    ZERO_ADDRESS,
    DiscountParameters,
    GovernanceLimits,
    InstrumentConfig,
    OracleState,
    PriceCacheEntry,
    Roles,
    is_null_identity,
)

__all__ = [
    # State records
    "ZERO_ADDRESS",
    "InstrumentConfig",
    "DiscountParameters",
    "GovernanceLimits",
    "Roles",
    "PriceCacheEntry",
    "OracleState",
    "is_null_identity",
    # Change records
    "ChangeRecord",
    "LinearDiscountUpdated",
    "LimitsUpdated",
    "ManagerUpdated",
    "AnyChangeRecord",
    # Interfaces
    "PriceSource",
    "MaturingToken",
]
