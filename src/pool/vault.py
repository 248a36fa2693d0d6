"""LiquidityVault — share-based учёт капитала пула

Порядок проверок deposit():
1. Пауза → EnforcedPause
2. amount > 0 → иначе ZeroValue
3. Mint долей > 0 → иначе AmountNotEnough

Порядок проверок withdrawal():
1. shares > 0 → иначе ZeroValue
2. shares <= доли LP → иначе NoLiquidity
3. eth_amount <= available_liquidity → иначе NoLiquidity
Затем: burn долей, уменьшение total_assets, и только после этого перевод.

Инварианты:
- available_liquidity + total_locked_coverage == total_assets
- sum(shares) == total_shares
"""

import logging
from typing import Dict

from src.core.domain.events import LiquidityProvided, LiquidityRemoved
from src.core.errors import AmountNotEnough, NoLiquidity, TransferFailed, ZeroValue
from src.core.math.shares import assets_for_shares, share_price, shares_for_deposit
from src.pool.access import PauseGate
from src.runtime.contract import Contract

logger = logging.getLogger(__name__)


class LiquidityVault:

    def __init__(self, contract: Contract, pause_gate: PauseGate):
        self._contract = contract
        self._pause_gate = pause_gate

    @property
    def _storage(self):
        return self._contract.storage

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def total_shares(self) -> int:
        return self._storage.total_shares

    @property
    def total_assets(self) -> int:
        return self._storage.total_assets

    @property
    def available_liquidity(self) -> int:
        return self._storage.total_assets - self._storage.total_locked_coverage

    @property
    def share_price(self) -> int:
        """Цена доли в WAD."""
        return share_price(self._storage.total_shares, self._storage.total_assets)

    def shares_of(self, lp: str) -> int:
        return self._storage.shares.get(lp, 0)

    def eth_balance(self, lp: str) -> int:
        return assets_for_shares(
            self.shares_of(lp), self._storage.total_shares, self._storage.total_assets
        )

    def holders(self) -> Dict[str, int]:
        return dict(self._storage.shares)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def deposit(self, lp: str, amount: int) -> int:
        """Mint долей под уже зачисленный на баланс пула депозит.

        Returns:
            Количество выпущенных долей
        """
        self._pause_gate.require_not_paused()
        if amount <= 0:
            raise ZeroValue(f"ZeroValue: deposit amount {amount} wei")

        storage = self._storage
        minted = shares_for_deposit(amount, storage.total_shares, storage.total_assets)
        if minted == 0:
            raise AmountNotEnough(
                f"AmountNotEnough: deposit of {amount} wei mints zero shares"
            )

        storage.shares[lp] = storage.shares.get(lp, 0) + minted
        storage.total_shares += minted
        storage.total_assets += amount

        self._contract._emit(LiquidityProvided(lp=lp, eth_amount=amount, shares=minted))
        logger.info("Deposit: lp=%s amount=%d wei shares=%d", lp, amount, minted)
        return minted

    def withdrawal(self, lp: str, shares: int) -> int:
        """Burn долей и выплата эквивалента в wei.

        Returns:
            Выплаченная сумма (wei)
        """
        if shares <= 0:
            raise ZeroValue(f"ZeroValue: shares amount {shares}")

        storage = self._storage
        owned = storage.shares.get(lp, 0)
        if shares > owned:
            raise NoLiquidity(f"NoLiquidity: {lp} owns {owned} shares, requested {shares}")

        eth_amount = assets_for_shares(shares, storage.total_shares, storage.total_assets)
        if eth_amount > self.available_liquidity:
            raise NoLiquidity(
                f"NoLiquidity: {eth_amount} wei requested, {self.available_liquidity} available"
            )

        storage.shares[lp] = owned - shares
        storage.total_shares -= shares
        storage.total_assets -= eth_amount

        if not self._contract.ledger.send(self._contract.address, lp, eth_amount):
            raise TransferFailed(f"TransferFailed: withdrawal of {eth_amount} wei to {lp}")

        self._contract._emit(LiquidityRemoved(lp=lp, eth_amount=eth_amount, shares=shares))
        logger.info("Withdrawal: lp=%s shares=%d amount=%d wei", lp, shares, eth_amount)
        return eth_amount

    # -------------------------------------------------------------------------
    # Lifecycle hooks
    # -------------------------------------------------------------------------

    def credit_premium(self, net_premium: int) -> None:
        """Net premium остаётся в пуле и повышает цену доли."""
        self._storage.total_assets += net_premium

    def debit_payout(self, amount: int) -> None:
        """Выплата по полису уменьшает капитал всех LP пропорционально."""
        self._storage.total_assets -= amount
