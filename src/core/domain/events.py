"""
Events — события пула и коллабораторов

Immutable Pydantic модели. Каждое событие сериализуется в payload
{"event": <имя класса>, "args": {...}}, который Ledger проверяет против
contracts/schema/pool_event.json перед записью в лог.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class Event(BaseModel):
    """Базовое событие."""

    model_config = {"frozen": True}

    @property
    def name(self) -> str:
        return type(self).__name__

    def payload(self) -> Dict[str, Any]:
        return {"event": self.name, "args": self.model_dump(mode="python")}


# =============================================================================
# LIQUIDITY VAULT
# =============================================================================


class LiquidityProvided(Event):
    lp: str
    eth_amount: int = Field(..., gt=0)
    shares: int = Field(..., gt=0)


class LiquidityRemoved(Event):
    lp: str
    eth_amount: int = Field(..., ge=0)
    shares: int = Field(..., gt=0)


# =============================================================================
# POLICY LIFECYCLE
# =============================================================================


class PolicyCreated(Event):
    policy_id: int = Field(..., ge=1)
    coverage: int = Field(..., gt=0)
    premium: int = Field(..., ge=0)
    start: int
    end: int


class PolicyResolved(Event):
    """amount == coverage при выплате, иначе 0."""

    policy_id: int = Field(..., ge=1)
    payout: bool
    amount: int = Field(..., ge=0)


# =============================================================================
# ADMIN
# =============================================================================


class ParametersUpdated(Event):
    max_coverage_bps: int
    premium_rate_bps: int
    protocol_fee_bps: int


class Paused(Event):
    account: str


class Unpaused(Event):
    account: str


class OwnershipTransferred(Event):
    previous_owner: str
    new_owner: str


class EmergencyWithdrawal(Event):
    target: str
    amount: int = Field(..., ge=0)


# =============================================================================
# COLLABORATORS
# =============================================================================


class FundsReceived(Event):
    sender: str
    amount: int = Field(..., gt=0)


class FundsWithdrawn(Event):
    to: str
    amount: int = Field(..., gt=0)


class Transfer(Event):
    """Смена владельца токена полиса (from_address = ZERO_ADDRESS при mint)."""

    from_address: str
    to_address: str
    token_id: int = Field(..., ge=1)


class InsurancePoolSet(Event):
    pool: str


class OutcomeRecorded(Event):
    policy_id: int = Field(..., ge=1)
    outcome: bool
