"""Ledger — сериализованная среда исполнения транзакций.

Модель исполнения:
- Все операции выполняются как целые транзакции в строгом глобальном порядке
  (RLock; вложенные вызовы из receive-hook разрешены в том же потоке)
- Транзакция либо фиксируется целиком, либо откатывается целиком:
  балансы, storage всех контрактов и лог событий восстанавливаются
- send() — low-level вызов: откат получателя превращается в False
- transfer() — то же, но откат получателя пробрасывается вызывающему

Время (Clock) не является частью состояния и не откатывается.
"""

import copy
import hashlib
import itertools
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Type, TypeVar

from src.core.contracts import PoolEventValidator
from src.core.domain.events import Event
from src.core.domain.units import validate_amount
from src.core.errors import InsufficientBalance, Revert
from src.runtime.clock import Clock

if TYPE_CHECKING:
    from src.runtime.contract import Contract

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x" + "0" * 40

E = TypeVar("E", bound=Event)


@dataclass(frozen=True)
class LogEntry:
    """Запись лога: событие, адрес эмитента и время блока."""

    emitter: str
    event: Event
    ts: int


@dataclass
class LedgerStorage:
    balances: Dict[str, int] = field(default_factory=dict)
    logs: List[LogEntry] = field(default_factory=list)


@dataclass(frozen=True)
class _Snapshot:
    balances: Dict[str, int]
    log_length: int
    contracts: Dict[str, Any]


class Ledger:
    """Среда исполнения: балансы, контракты, лог событий, часы.

    Пример:
        ledger = Ledger(clock=Clock(start=1_700_000_000))
        ledger.fund("0xalice", to_wei(100))
        with ledger.transaction():
            ...
    """

    def __init__(self, clock: Optional[Clock] = None, validate_events: bool = True):
        """
        Args:
            clock: часы среды (по умолчанию — от текущего времени)
            validate_events: проверять каждое событие по pool_event.json
        """
        self.clock = clock or Clock()
        self._storage = LedgerStorage()
        self._contracts: Dict[str, "Contract"] = {}
        self._lock = threading.RLock()
        self._depth = 0
        self._address_seq = itertools.count(1)
        self._event_validator = PoolEventValidator() if validate_events else None

    # -------------------------------------------------------------------------
    # Accounts / contracts
    # -------------------------------------------------------------------------

    def new_address(self, label: str = "account") -> str:
        """Детерминированный адрес вида 0x + 40 hex."""
        seed = f"{label}:{next(self._address_seq)}".encode("utf-8")
        return "0x" + hashlib.sha256(seed).hexdigest()[:40]

    def register(self, contract: "Contract") -> None:
        if contract.address in self._contracts:
            raise ValueError(f"Address already in use: {contract.address}")
        self._contracts[contract.address] = contract
        logger.debug("Registered %s at %s", type(contract).__name__, contract.address)

    def contract_at(self, address: str) -> Optional["Contract"]:
        return self._contracts.get(address)

    @property
    def depth(self) -> int:
        """Текущая глубина вложенности транзакций (0 — вне транзакции)."""
        return self._depth

    # -------------------------------------------------------------------------
    # Balances
    # -------------------------------------------------------------------------

    def balance_of(self, address: str) -> int:
        return self._storage.balances.get(address, 0)

    def fund(self, address: str, amount: int) -> None:
        """Начисление баланса вне транзакций (genesis / тестовые аккаунты)."""
        validate_amount(amount)
        with self._lock:
            balances = self._storage.balances
            balances[address] = balances.get(address, 0) + amount

    def pay(self, sender: str, to: str, amount: int) -> None:
        """Перенос value, приложенного к вызову функции (без receive-hook).

        Raises:
            InsufficientBalance: если у отправителя не хватает средств
        """
        validate_amount(amount)
        balances = self._storage.balances
        available = balances.get(sender, 0)
        if available < amount:
            raise InsufficientBalance(sender, available, amount)
        balances[sender] = available - amount
        balances[to] = balances.get(to, 0) + amount

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Нативный перевод с вызовом receive() получателя-контракта.

        Выполняется во вложенной транзакции: откат получателя откатывает и
        сам перевод, после чего исключение пробрасывается.
        """
        with self.transaction():
            self.pay(sender, to, amount)
            recipient = self._contracts.get(to)
            if recipient is not None:
                recipient.receive(sender, amount)

    def send(self, sender: str, to: str, amount: int) -> bool:
        """Low-level перевод: False вместо исключения при откате получателя."""
        try:
            self.transfer(sender, to, amount)
        except Revert as exc:
            logger.warning(
                "Native transfer %s -> %s of %d wei failed: %s", sender, to, amount, exc
            )
            return False
        return True

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def emit(self, emitter: str, event: Event) -> None:
        if self._event_validator is not None:
            self._event_validator.validate(event.payload())
        self._storage.logs.append(LogEntry(emitter=emitter, event=event, ts=self.clock.now))

    @property
    def logs(self) -> List[LogEntry]:
        return list(self._storage.logs)

    def events(
        self,
        event_type: Optional[Type[E]] = None,
        emitter: Optional[str] = None,
    ) -> List[E]:
        """Выборка событий из лога в порядке записи.

        Args:
            event_type: фильтр по классу события
            emitter: фильтр по адресу эмитента
        """
        return [
            entry.event
            for entry in self._storage.logs
            if (event_type is None or isinstance(entry.event, event_type))
            and (emitter is None or entry.emitter == emitter)
        ]

    def last_event(self, event_type: Type[E], emitter: Optional[str] = None) -> Optional[E]:
        found = self.events(event_type, emitter)
        return found[-1] if found else None

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator["Ledger"]:
        """Атомарная транзакция (вложенные вызовы откатываются независимо).

        Любое исключение внутри блока восстанавливает балансы, storage всех
        контрактов и лог событий, после чего пробрасывается дальше.
        """
        with self._lock:
            snapshot = self._snapshot()
            self._depth += 1
            try:
                yield self
            except Exception as exc:
                self._restore(snapshot)
                logger.debug(
                    "Transaction reverted at depth %d: %s: %s",
                    self._depth, type(exc).__name__, exc,
                )
                raise
            finally:
                self._depth -= 1

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(
            balances=dict(self._storage.balances),
            log_length=len(self._storage.logs),
            contracts={
                address: contract.snapshot_storage()
                for address, contract in self._contracts.items()
            },
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        self._storage.balances = copy.copy(snapshot.balances)
        del self._storage.logs[snapshot.log_length:]
        for address, storage in snapshot.contracts.items():
            self._contracts[address].restore_storage(storage)
