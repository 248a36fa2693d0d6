"""
Domain models and value objects.

Contains fundamental domain entities like Policy, PoolParameters, PoolSnapshot
and the pool event models.
"""

from src.core.domain.events import (
    Event,
    LiquidityProvided,
    LiquidityRemoved,
    ParametersUpdated,
    PolicyCreated,
    PolicyResolved,
)
from src.core.domain.policy import Policy, PolicyStatus
from src.core.domain.pool_state import PoolParameters, PoolSnapshot, Totals
from src.core.domain.units import (
    BPS,
    DAY,
    MAX_POLICY_DURATION,
    WAD,
    bps_of,
    from_wei,
    is_valid_bps,
    to_wei,
    validate_amount,
)

__all__ = [
    # Units module
    "BPS",
    "WAD",
    "DAY",
    "MAX_POLICY_DURATION",
    "to_wei",
    "from_wei",
    "bps_of",
    "is_valid_bps",
    "validate_amount",
    # Policy model
    "Policy",
    "PolicyStatus",
    # Pool state
    "PoolParameters",
    "PoolSnapshot",
    "Totals",
    # Events
    "Event",
    "LiquidityProvided",
    "LiquidityRemoved",
    "PolicyCreated",
    "PolicyResolved",
    "ParametersUpdated",
]
