"""InsurancePool — параметрический страховой пул ликвидности

Контракт-фасад: каждая публичная операция выполняется как одна транзакция
Ledger и делегирует компонентам:
- ParameterStore — три параметра в bps
- LiquidityVault — доли LP и total_assets
- PolicyLedger — записи полисов и заблокированное покрытие
- PolicyLifecycle — buy / resolve / expire
- AccessControl / PauseGate — владелец и пауза

Payable-операции (deposit, buy_policy) принимают value: сумма переносится
с баланса вызывающего на баланс пула в начале транзакции и возвращается
при откате.

emergency_withdraw() обходит учёт долей и блокировок: после него
total_assets может не совпадать с фактическим балансом пула (available_liquidity
и заблокированное покрытие считаются от учётного total_assets).
"""

import logging
from typing import Dict, List, Optional

from src.core.contracts import PoolSnapshotValidator
from src.core.domain.events import EmergencyWithdrawal
from src.core.domain.policy import Policy
from src.core.domain.pool_state import PoolParameters, PoolSnapshot, Totals
from src.core.domain.units import BPS, MAX_POLICY_DURATION
from src.core.errors import TransferFailed, ZeroValue
from src.pool.access import AccessControl, PauseGate
from src.pool.interfaces import FeeSink, OutcomeOracle, OwnershipToken
from src.pool.lifecycle import PolicyLifecycle, PurchaseResult, SettlementResult
from src.pool.parameters import ParameterStore
from src.pool.policy_ledger import PolicyLedger
from src.pool.storage import PoolStorage
from src.pool.vault import LiquidityVault
from src.runtime.contract import Contract
from src.runtime.ledger import Ledger

logger = logging.getLogger(__name__)


class InsurancePool(Contract):
    """Страховой пул.

    Пример:
        pool = InsurancePool(ledger, owner, token, oracle, treasury, 2000, 300, 500)
        pool.deposit(lp, value=to_wei(100))
        result = pool.buy_policy(buyer, coverage=to_wei(1), duration=7 * DAY,
                                 value=to_wei("0.03"))
        oracle.set_event(owner, result.policy.id, True)
        pool.resolve_policy(owner, result.policy.id)
    """

    BPS = BPS

    def __init__(
        self,
        ledger: Ledger,
        owner: str,
        token: OwnershipToken,
        oracle: OutcomeOracle,
        treasury: FeeSink,
        max_coverage_bps: int,
        premium_rate_bps: int,
        protocol_fee_bps: int,
        max_policy_duration: int = MAX_POLICY_DURATION,
        address: Optional[str] = None,
    ):
        parameters = ParameterStore.validate(max_coverage_bps, premium_rate_bps, protocol_fee_bps)
        super().__init__(ledger, PoolStorage(owner=owner, parameters=parameters), address)

        self.token = token
        self.oracle = oracle
        self.treasury = treasury

        self.access = AccessControl(self)
        self.pause_gate = PauseGate(self, self.access)
        self.parameters = ParameterStore(self, self.access)
        self.vault = LiquidityVault(self, self.pause_gate)
        self.policy_ledger = PolicyLedger(self)
        self.lifecycle = PolicyLifecycle(
            contract=self,
            access=self.access,
            pause_gate=self.pause_gate,
            parameters=self.parameters,
            vault=self.vault,
            policies=self.policy_ledger,
            token=token,
            oracle=oracle,
            treasury=treasury,
            max_policy_duration=max_policy_duration,
        )
        self._snapshot_validator = PoolSnapshotValidator()

        logger.info(
            "InsurancePool deployed at %s: owner=%s max_coverage=%d premium_rate=%d protocol_fee=%d bps",
            self.address, owner, max_coverage_bps, premium_rate_bps, protocol_fee_bps,
        )

    # =========================================================================
    # LIQUIDITY
    # =========================================================================

    def _accept_value(self, sender: str, value: int) -> None:
        """Зачисление value payable-вызова на баланс пула."""
        if value < 0:
            raise ZeroValue(f"ZeroValue: negative value {value} wei")
        self.ledger.pay(sender, self.address, value)

    def deposit(self, sender: str, value: int) -> int:
        """Депозит ликвидности (payable). Возвращает выпущенные доли."""
        with self.ledger.transaction():
            self._accept_value(sender, value)
            return self.vault.deposit(sender, value)

    def withdrawal(self, sender: str, shares: int) -> int:
        """Вывод ликвидности. Доступен и на паузе. Возвращает сумму (wei)."""
        with self.ledger.transaction():
            return self.vault.withdrawal(sender, shares)

    # =========================================================================
    # POLICIES
    # =========================================================================

    def buy_policy(self, sender: str, coverage: int, duration: int, value: int) -> PurchaseResult:
        """Покупка полиса (payable): value должен строго равняться премии."""
        with self.ledger.transaction():
            self._accept_value(sender, value)
            return self.lifecycle.buy_policy(sender, coverage, duration, value)

    def resolve_policy(self, sender: str, policy_id: int) -> SettlementResult:
        with self.ledger.transaction():
            return self.lifecycle.resolve_policy(sender, policy_id)

    def expire_policy(self, sender: str, policy_id: int) -> SettlementResult:
        with self.ledger.transaction():
            return self.lifecycle.expire_policy(sender, policy_id)

    # =========================================================================
    # ADMIN
    # =========================================================================

    def update_parameters(
        self,
        sender: str,
        max_coverage_bps: int,
        premium_rate_bps: int,
        protocol_fee_bps: int,
    ) -> PoolParameters:
        with self.ledger.transaction():
            return self.parameters.update(
                sender, max_coverage_bps, premium_rate_bps, protocol_fee_bps
            )

    def pause(self, sender: str) -> None:
        with self.ledger.transaction():
            self.pause_gate.pause(sender)

    def unpause(self, sender: str) -> None:
        with self.ledger.transaction():
            self.pause_gate.unpause(sender)

    def transfer_ownership(self, sender: str, new_owner: str) -> None:
        with self.ledger.transaction():
            self.access.transfer_ownership(sender, new_owner)

    def emergency_withdraw(self, sender: str, target: str, amount: int) -> None:
        """Аварийный вывод средств владельцем (доступен на паузе).

        Raises:
            OwnableUnauthorizedAccount: не владелец
            ZeroValue: amount <= 0
            TransferFailed: amount больше фактического баланса или получатель
                отклонил перевод
        """
        with self.ledger.transaction():
            self.access.require_owner(sender)
            if amount <= 0:
                raise ZeroValue(f"ZeroValue: emergency amount {amount} wei")
            if amount > self.balance:
                raise TransferFailed(
                    f"TransferFailed: emergency amount {amount} wei exceeds balance {self.balance} wei"
                )
            if not self.ledger.send(self.address, target, amount):
                raise TransferFailed(f"TransferFailed: emergency withdrawal to {target}")

            self._emit(EmergencyWithdrawal(target=target, amount=amount))
            logger.warning(
                "Emergency withdrawal from pool %s: %d wei to %s (tracked assets %d wei, balance %d wei)",
                self.address, amount, target, self.storage.total_assets, self.balance,
            )

    # =========================================================================
    # VIEWS
    # =========================================================================

    @property
    def owner(self) -> str:
        return self.access.owner

    @property
    def paused(self) -> bool:
        return self.pause_gate.paused

    def shares_of(self, lp: str) -> int:
        return self.vault.shares_of(lp)

    def eth_balance(self, lp: str) -> int:
        return self.vault.eth_balance(lp)

    def total_shares(self) -> int:
        return self.vault.total_shares

    def total_assets(self) -> int:
        return self.vault.total_assets

    def total_locked_coverage(self) -> int:
        return self.policy_ledger.total_locked_coverage

    def available_liquidity(self) -> int:
        return self.vault.available_liquidity

    def policies(self, policy_id: int) -> Policy:
        return self.policy_ledger.get(policy_id)

    def all_policies(self) -> List[Policy]:
        return self.policy_ledger.all()

    def max_coverage_bps(self) -> int:
        return self.parameters.current.max_coverage_bps

    def premium_rate_bps(self) -> int:
        return self.parameters.current.premium_rate_bps

    def protocol_fee_bps(self) -> int:
        return self.parameters.current.protocol_fee_bps

    def holders(self) -> Dict[str, int]:
        return self.vault.holders()

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    def snapshot(self, validate: bool = True) -> PoolSnapshot:
        """Снапшот агрегата пула.

        Args:
            validate: проверить JSON-представление по pool_snapshot.json

        Raises:
            jsonschema.ValidationError: если снапшот не соответствует схеме
        """
        snapshot = PoolSnapshot(
            address=self.address,
            owner=self.owner,
            ts=self.ledger.clock.now,
            paused=self.paused,
            parameters=self.parameters.current,
            totals=Totals(
                total_shares=self.total_shares(),
                total_assets=self.total_assets(),
                total_locked_coverage=self.total_locked_coverage(),
                available_liquidity=self.available_liquidity(),
                balance=self.balance,
            ),
            shares=self.holders(),
            policies=self.all_policies(),
        )
        if validate:
            self._snapshot_validator.validate(snapshot)
        return snapshot
