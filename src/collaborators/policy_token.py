"""PolicyToken — токен владения полисом

Минимальный non-fungible токен: tokenId == policyId.
- mint() разрешён только привязанному пулу → NotInsurancePool
- Текущий держатель токена — бенефициар выплаты по полису
- policies_of_owner() возвращает tokenId в порядке получения

Совместимость со стандартом токенов (approve, safeTransfer, metadata)
не реализуется.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.core.domain.events import InsurancePoolSet, Transfer
from src.core.errors import (
    IncorrectTokenOwner,
    InvalidReceiver,
    NonexistentToken,
    NotInsurancePool,
)
from src.pool.access import AccessControl
from src.runtime.contract import Contract
from src.runtime.ledger import ZERO_ADDRESS, Ledger

logger = logging.getLogger(__name__)


@dataclass
class PolicyTokenStorage:
    owner: str
    insurance_pool: Optional[str] = None
    next_token_id: int = 1
    owners: Dict[int, str] = field(default_factory=dict)
    tokens_of: Dict[str, List[int]] = field(default_factory=dict)


class PolicyToken(Contract):
    """Токен владения полисом."""

    def __init__(self, ledger: Ledger, owner: str, address: Optional[str] = None):
        super().__init__(ledger, PolicyTokenStorage(owner=owner), address)
        self.access = AccessControl(self)

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    @property
    def owner(self) -> str:
        return self.access.owner

    @property
    def insurance_pool(self) -> Optional[str]:
        return self.storage.insurance_pool

    def set_insurance_pool(self, sender: str, pool: str) -> None:
        """Привязка пула, которому разрешён mint (owner-only)."""
        with self.ledger.transaction():
            self.access.require_owner(sender)
            if not pool or pool == ZERO_ADDRESS:
                raise InvalidReceiver(f"Invalid insurance pool address: {pool!r}")

            self.storage.insurance_pool = pool
            self._emit(InsurancePoolSet(pool=pool))
            logger.info("PolicyToken %s bound to pool %s", self.address, pool)

    # -------------------------------------------------------------------------
    # Mint / transfer
    # -------------------------------------------------------------------------

    def mint(self, sender: str, to: str) -> int:
        """Выпуск токена полиса.

        Returns:
            tokenId (монотонно растёт с 1)

        Raises:
            NotInsurancePool: если sender не привязанный пул
        """
        with self.ledger.transaction():
            if self.storage.insurance_pool is None or sender != self.storage.insurance_pool:
                raise NotInsurancePool()
            if not to or to == ZERO_ADDRESS:
                raise InvalidReceiver(f"Invalid receiver: {to!r}")

            token_id = self.storage.next_token_id
            self.storage.next_token_id += 1
            self._assign(token_id, to)
            self._emit(Transfer(from_address=ZERO_ADDRESS, to_address=to, token_id=token_id))
            return token_id

    def transfer_from(self, sender: str, from_address: str, to: str, token_id: int) -> None:
        """Передача токена (и права на выплату) новому держателю."""
        with self.ledger.transaction():
            holder = self.owner_of(token_id)
            if sender != holder or from_address != holder:
                raise IncorrectTokenOwner(
                    f"IncorrectTokenOwner: {sender} cannot move token {token_id} held by {holder}"
                )
            if not to or to == ZERO_ADDRESS:
                raise InvalidReceiver(f"Invalid receiver: {to!r}")

            self.storage.tokens_of[holder].remove(token_id)
            self._assign(token_id, to)
            self._emit(Transfer(from_address=holder, to_address=to, token_id=token_id))
            logger.info("Policy token %d transferred %s -> %s", token_id, holder, to)

    def _assign(self, token_id: int, to: str) -> None:
        self.storage.owners[token_id] = to
        self.storage.tokens_of.setdefault(to, []).append(token_id)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def owner_of(self, token_id: int) -> str:
        holder = self.storage.owners.get(token_id)
        if holder is None:
            raise NonexistentToken(token_id)
        return holder

    def balance_of(self, owner: str) -> int:
        return len(self.storage.tokens_of.get(owner, []))

    def policies_of_owner(self, owner: str) -> List[int]:
        return list(self.storage.tokens_of.get(owner, []))
