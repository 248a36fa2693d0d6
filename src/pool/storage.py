"""PoolStorage — единственный агрегат состояния пула.

Изменяется только через операции компонентов (vault, policy ledger,
parameter store, pause gate) внутри транзакции Ledger.
"""

from dataclasses import dataclass, field
from typing import Dict

from src.core.domain.policy import Policy
from src.core.domain.pool_state import PoolParameters


@dataclass
class PoolStorage:
    owner: str
    parameters: PoolParameters
    paused: bool = False

    # LiquidityVault
    shares: Dict[str, int] = field(default_factory=dict)
    total_shares: int = 0
    total_assets: int = 0

    # PolicyLedger
    policies: Dict[int, Policy] = field(default_factory=dict)
    total_locked_coverage: int = 0
    next_policy_id: int = 1
