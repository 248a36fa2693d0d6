"""Treasury — получатель комиссии протокола."""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.domain.events import FundsReceived, FundsWithdrawn
from src.core.errors import TransferFailed, ZeroAmount
from src.pool.access import AccessControl
from src.runtime.contract import Contract
from src.runtime.ledger import Ledger

logger = logging.getLogger(__name__)


@dataclass
class TreasuryStorage:
    owner: str


class Treasury(Contract):
    """Копилка комиссий: принимает нативные переводы, вывод только владельцем."""

    def __init__(self, ledger: Ledger, owner: str, address: Optional[str] = None):
        super().__init__(ledger, TreasuryStorage(owner=owner), address)
        self.access = AccessControl(self)

    @property
    def owner(self) -> str:
        return self.access.owner

    def receive(self, sender: str, amount: int) -> None:
        if amount == 0:
            raise ZeroAmount()
        self._emit(FundsReceived(sender=sender, amount=amount))
        logger.debug("Treasury %s received %d wei from %s", self.address, amount, sender)

    def withdrawal(self, sender: str, to: str, amount: int) -> None:
        """Вывод средств (owner-only).

        Raises:
            OwnableUnauthorizedAccount: не владелец
            ZeroAmount: amount == 0
            TransferFailed: недостаточно средств или получатель отклонил перевод
        """
        with self.ledger.transaction():
            self.access.require_owner(sender)
            if amount == 0:
                raise ZeroAmount()
            if amount > self.balance or not self.ledger.send(self.address, to, amount):
                raise TransferFailed(f"Treasury withdrawal of {amount} wei to {to} failed")

            self._emit(FundsWithdrawn(to=to, amount=amount))
            logger.info("Treasury %s withdrew %d wei to %s", self.address, amount, to)
