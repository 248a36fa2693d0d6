"""AccessControl / PauseGate — владелец и пауза

AccessControl:
- Единственный владелец, явная проверка capability в начале каждой
  owner-only операции → OwnableUnauthorizedAccount
- transfer_ownership (owner-only)

PauseGate:
- Пауза блокирует только приток капитала (deposit, buy_policy) → EnforcedPause
- withdrawal, emergency_withdraw, resolve_policy, expire_policy на паузе
  остаются доступными: пауза останавливает новые обязательства, но не
  закрывает пути выхода и администрирования

Состояние (owner, paused) хранится в storage контракта, поэтому
откатывается вместе с транзакцией.
"""

import logging

from src.core.domain.events import OwnershipTransferred, Paused, Unpaused
from src.core.errors import (
    EnforcedPause,
    ExpectedPause,
    OwnableInvalidOwner,
    OwnableUnauthorizedAccount,
)
from src.runtime.contract import Contract
from src.runtime.ledger import ZERO_ADDRESS

logger = logging.getLogger(__name__)


class AccessControl:
    """Single-owner авторизация.

    Требует от storage контракта атрибут `owner`.
    """

    def __init__(self, contract: Contract):
        self._contract = contract

    @property
    def owner(self) -> str:
        return self._contract.storage.owner

    def require_owner(self, caller: str) -> None:
        """
        Raises:
            OwnableUnauthorizedAccount: если caller не владелец
        """
        if caller != self.owner:
            raise OwnableUnauthorizedAccount(caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self.require_owner(caller)
        if not new_owner or new_owner == ZERO_ADDRESS:
            raise OwnableInvalidOwner(f"OwnableInvalidOwner: {new_owner!r}")

        previous = self.owner
        self._contract.storage.owner = new_owner
        self._contract._emit(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))
        logger.info("Ownership of %s transferred: %s -> %s", self._contract.address, previous, new_owner)


class PauseGate:
    """Переключатель паузы для операций притока капитала.

    Порядок проверок в pause()/unpause():
    1. Владелец → иначе OwnableUnauthorizedAccount
    2. Текущее состояние → EnforcedPause / ExpectedPause
    """

    def __init__(self, contract: Contract, access: AccessControl):
        self._contract = contract
        self._access = access

    @property
    def paused(self) -> bool:
        return self._contract.storage.paused

    def require_not_paused(self) -> None:
        if self.paused:
            raise EnforcedPause()

    def require_paused(self) -> None:
        if not self.paused:
            raise ExpectedPause()

    def pause(self, caller: str) -> None:
        self._access.require_owner(caller)
        self.require_not_paused()

        self._contract.storage.paused = True
        self._contract._emit(Paused(account=caller))
        logger.info("Pool %s paused by %s", self._contract.address, caller)

    def unpause(self, caller: str) -> None:
        self._access.require_owner(caller)
        self.require_paused()

        self._contract.storage.paused = False
        self._contract._emit(Unpaused(account=caller))
        logger.info("Pool %s unpaused by %s", self._contract.address, caller)
