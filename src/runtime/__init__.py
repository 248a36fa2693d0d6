"""Runtime — сериализованная среда исполнения контрактов пула.

- Ledger: балансы, атомарные транзакции, лог событий
- Contract: базовый класс контракта со snapshot/restore storage
- Clock: время исполнения
"""

from .clock import Clock
from .contract import Contract
from .ledger import ZERO_ADDRESS, Ledger, LogEntry

__all__ = [
    "Clock",
    "Contract",
    "Ledger",
    "LogEntry",
    "ZERO_ADDRESS",
]
