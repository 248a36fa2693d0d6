"""Contract — базовый класс in-process контракта.

Контракт владеет адресом на Ledger и единственным объектом storage
(dataclass с простыми данными). Ledger делает snapshot storage перед каждой
транзакцией и восстанавливает его при откате, поэтому всё изменяемое
состояние контракта должно жить только в storage.
"""

import copy
from typing import TYPE_CHECKING, Any, Optional

from src.core.domain.events import Event
from src.core.errors import Revert

if TYPE_CHECKING:
    from src.runtime.ledger import Ledger


class Contract:
    """Базовый контракт.

    По умолчанию контракт не принимает нативные переводы без вызова функции
    (receive() отклоняет перевод). Наследники, которым это нужно (Treasury),
    переопределяют receive().
    """

    def __init__(self, ledger: "Ledger", storage: Any, address: Optional[str] = None):
        self.ledger = ledger
        self.storage = storage
        self.address = address or ledger.new_address(type(self).__name__)
        ledger.register(self)

    # -------------------------------------------------------------------------
    # Storage snapshot / restore
    # -------------------------------------------------------------------------

    def snapshot_storage(self) -> Any:
        return copy.deepcopy(self.storage)

    def restore_storage(self, snapshot: Any) -> None:
        # In-place: компоненты держат ссылку на тот же объект storage
        vars(self.storage).clear()
        vars(self.storage).update(vars(snapshot))

    # -------------------------------------------------------------------------
    # Ledger helpers
    # -------------------------------------------------------------------------

    @property
    def balance(self) -> int:
        """Фактический нативный баланс контракта (wei)."""
        return self.ledger.balance_of(self.address)

    def receive(self, sender: str, amount: int) -> None:
        """Hook входящего перевода без вызова функции."""
        raise Revert(f"{type(self).__name__} does not accept plain transfers")

    def _emit(self, event: Event) -> None:
        self.ledger.emit(self.address, event)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address!r})"
