"""
Insurance Pool — пул ликвидности и lifecycle полисов.
"""

from .access import AccessControl, PauseGate
from .insurance_pool import InsurancePool
from .lifecycle import PolicyLifecycle, PurchaseResult, SettlementResult
from .parameters import ParameterStore
from .policy_ledger import PolicyLedger
from .storage import PoolStorage
from .vault import LiquidityVault

__all__ = [
    "AccessControl",
    "InsurancePool",
    "LiquidityVault",
    "ParameterStore",
    "PauseGate",
    "PolicyLedger",
    "PolicyLifecycle",
    "PoolStorage",
    "PurchaseResult",
    "SettlementResult",
]
