"""PolicyLifecycle — state machine полиса

Состояния: ACTIVE (при создании) → RESOLVED (терминальное).
Два взаимоисключающих пути закрытия:
- resolve: по исходу оракула, выплата coverage текущему держателю токена
- expire: по времени (now >= end), без выплаты

Во всех переходах изменения PoolStorage применяются до любого исходящего
перевода: reentrant-вызов из receive-hook получателя видит уже обновлённое
состояние (полис закрыт, покрытие разблокировано, total_assets уменьшен).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.domain.events import PolicyCreated, PolicyResolved
from src.core.domain.policy import Policy
from src.core.errors import (
    AlreadyResolved,
    CoverageLimitExceeded,
    DurationOutOfRange,
    PolicyNotExpired,
    TransferFailed,
    WrongPremium,
    ZeroValue,
)
from src.core.math.fees import coverage_cap, required_premium, split_premium
from src.pool.access import AccessControl, PauseGate
from src.pool.interfaces import FeeSink, OutcomeOracle, OwnershipToken
from src.pool.parameters import ParameterStore
from src.pool.policy_ledger import PolicyLedger
from src.pool.vault import LiquidityVault
from src.runtime.contract import Contract

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseResult:
    """Результат покупки полиса."""

    policy: Policy
    net_premium: int
    protocol_fee: int
    token_id: int


@dataclass(frozen=True)
class SettlementResult:
    """Результат закрытия полиса (resolve или expire)."""

    policy: Policy
    payout: bool
    amount: int
    beneficiary: Optional[str]

    # Диагностика
    reason: str


class PolicyLifecycle:
    """Оркестрация buy/resolve/expire поверх vault, policy ledger и коллабораторов.

    buy_policy():
    1. Пауза → EnforcedPause
    2. coverage > 0 → иначе ZeroValue
    3. 0 < duration <= max_policy_duration → иначе DurationOutOfRange
    4. coverage <= available_liquidity * max_coverage_bps / BPS → иначе CoverageLimitExceeded
    5. paid == coverage * premium_rate_bps / BPS (строго) → иначе WrongPremium
    6. Split премии: protocol_fee, net_premium (floor)
    7. total_assets += net_premium; lock coverage; запись полиса
    8. Комиссия → Treasury (TransferFailed); mint токена покупателю
    9. PolicyCreated
    """

    def __init__(
        self,
        contract: Contract,
        access: AccessControl,
        pause_gate: PauseGate,
        parameters: ParameterStore,
        vault: LiquidityVault,
        policies: PolicyLedger,
        token: OwnershipToken,
        oracle: OutcomeOracle,
        treasury: FeeSink,
        max_policy_duration: int,
    ):
        self._contract = contract
        self._access = access
        self._pause_gate = pause_gate
        self._parameters = parameters
        self._vault = vault
        self._policies = policies
        self._token = token
        self._oracle = oracle
        self._treasury = treasury
        self.max_policy_duration = max_policy_duration

    # -------------------------------------------------------------------------
    # Buy
    # -------------------------------------------------------------------------

    def buy_policy(self, buyer: str, coverage: int, duration: int, paid: int) -> PurchaseResult:
        """Покупка полиса.

        Args:
            buyer: покупатель (получает токен владения)
            coverage: выплата при наступлении события (wei)
            duration: срок действия (секунды)
            paid: value, приложенный к вызову (уже зачислен на баланс пула)
        """
        self._pause_gate.require_not_paused()
        if coverage <= 0:
            raise ZeroValue(f"ZeroValue: coverage {coverage} wei")
        if not 0 < duration <= self.max_policy_duration:
            raise DurationOutOfRange(
                f"DurationOutOfRange: {duration}s outside (0, {self.max_policy_duration}]"
            )

        parameters = self._parameters.current
        cap = coverage_cap(self._vault.available_liquidity, parameters.max_coverage_bps)
        if coverage > cap:
            raise CoverageLimitExceeded(
                f"CoverageLimitExceeded: coverage {coverage} wei above cap {cap} wei"
            )

        premium = required_premium(coverage, parameters.premium_rate_bps)
        if paid != premium:
            raise WrongPremium(f"WrongPremium: paid {paid} wei, required {premium} wei")

        split = split_premium(premium, parameters.protocol_fee_bps)

        # Effects
        self._vault.credit_premium(split.net_premium)
        start = self._contract.ledger.clock.now
        policy = self._policies.record(coverage, premium, start, start + duration)

        # Interactions
        if split.protocol_fee > 0 and not self._contract.ledger.send(
            self._contract.address, self._treasury.address, split.protocol_fee
        ):
            raise TransferFailed(
                f"TransferFailed: protocol fee {split.protocol_fee} wei to treasury"
            )
        token_id = self._token.mint(self._contract.address, buyer)

        self._contract._emit(
            PolicyCreated(
                policy_id=policy.id,
                coverage=policy.coverage,
                premium=policy.premium,
                start=policy.start,
                end=policy.end,
            )
        )
        logger.info(
            "Policy %d created: buyer=%s coverage=%d premium=%d fee=%d end=%d",
            policy.id, buyer, coverage, premium, split.protocol_fee, policy.end,
        )
        return PurchaseResult(
            policy=policy,
            net_premium=split.net_premium,
            protocol_fee=split.protocol_fee,
            token_id=token_id,
        )

    # -------------------------------------------------------------------------
    # Resolve / expire
    # -------------------------------------------------------------------------

    def resolve_policy(self, caller: str, policy_id: int) -> SettlementResult:
        """Закрытие по исходу оракула (owner-only, до или после end).

        Бенефициар — держатель токена на момент resolve, не исходный покупатель.
        """
        self._access.require_owner(caller)
        policy = self._policies.close(policy_id)

        if not self._oracle.is_event_happened(policy_id):
            result = SettlementResult(
                policy=policy, payout=False, amount=0, beneficiary=None,
                reason="outcome_false",
            )
        else:
            beneficiary = self._token.owner_of(policy_id)
            self._vault.debit_payout(policy.coverage)
            if not self._contract.ledger.send(
                self._contract.address, beneficiary, policy.coverage
            ):
                raise TransferFailed(
                    f"TransferFailed: payout {policy.coverage} wei to {beneficiary}"
                )
            result = SettlementResult(
                policy=policy, payout=True, amount=policy.coverage, beneficiary=beneficiary,
                reason="outcome_true",
            )

        self._emit_resolved(result)
        return result

    def expire_policy(self, caller: str, policy_id: int) -> SettlementResult:
        """Закрытие по времени (owner-only, now >= end), без выплаты."""
        self._access.require_owner(caller)
        policy = self._policies.get(policy_id)
        if policy.resolved:
            raise AlreadyResolved(f"AlreadyResolved: {policy_id}")
        now = self._contract.ledger.clock.now
        if not policy.is_expired(now):
            raise PolicyNotExpired(
                f"PolicyNotExpired: {policy_id} ends at {policy.end}, now {now}"
            )
        policy = self._policies.close(policy_id)

        result = SettlementResult(
            policy=policy, payout=False, amount=0, beneficiary=None, reason="expired",
        )
        self._emit_resolved(result)
        return result

    def _emit_resolved(self, result: SettlementResult) -> None:
        self._contract._emit(
            PolicyResolved(policy_id=result.policy.id, payout=result.payout, amount=result.amount)
        )
        logger.info(
            "Policy %d resolved (%s): payout=%s amount=%d",
            result.policy.id, result.reason, result.payout, result.amount,
        )
