"""
Общие fixtures: среда исполнения, аккаунты, развёрнутый протокол и
тестовые контракты-получатели (отклоняющий перевод и reentrant).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

import pytest

from src.core.domain.units import WEEK, to_wei
from src.core.math import required_premium
from src.core.errors import Revert
from src.deploy import Deployment, deploy_protocol
from src.runtime import Clock, Contract, Ledger

GENESIS_TS = 1_700_000_000
ACCOUNT_BALANCE = to_wei(10_000)


def buy(pool, buyer: str, coverage: int, duration: int = WEEK):
    """Покупка полиса с точной премией по текущим параметрам пула."""
    premium = required_premium(coverage, pool.premium_rate_bps())
    return pool.buy_policy(buyer, coverage=coverage, duration=duration, value=premium)


# =============================================================================
# TEST CONTRACTS
# =============================================================================


@dataclass
class ProbeStorage:
    received: int = 0
    observations: List[Any] = field(default_factory=list)
    reentry_errors: List[str] = field(default_factory=list)


class RejectTransfer(Contract):
    """Контракт, отклоняющий любой входящий перевод."""

    def __init__(self, ledger: Ledger):
        super().__init__(ledger, ProbeStorage())

    def receive(self, sender: str, amount: int) -> None:
        raise Revert("RejectTransfer: ETH rejected")


class ReentrantReceiver(Contract):
    """Получатель, выполняющий hook при каждом входящем переводе.

    Результат hook записывается в observations, Revert из reentrant-вызова —
    в reentry_errors (перевод при этом принимается).
    """

    def __init__(self, ledger: Ledger, hook: Optional[Callable[["ReentrantReceiver"], Any]] = None):
        super().__init__(ledger, ProbeStorage())
        self.hook = hook

    def receive(self, sender: str, amount: int) -> None:
        self.storage.received += amount
        if self.hook is None:
            return
        try:
            self.storage.observations.append(self.hook(self))
        except Revert as exc:
            self.storage.reentry_errors.append(type(exc).__name__)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def ledger() -> Ledger:
    return Ledger(clock=Clock(start=GENESIS_TS))


@pytest.fixture
def owner(ledger) -> str:
    address = ledger.new_address("owner")
    ledger.fund(address, ACCOUNT_BALANCE)
    return address


@pytest.fixture
def user1(ledger) -> str:
    address = ledger.new_address("user1")
    ledger.fund(address, ACCOUNT_BALANCE)
    return address


@pytest.fixture
def user2(ledger) -> str:
    address = ledger.new_address("user2")
    ledger.fund(address, ACCOUNT_BALANCE)
    return address


@pytest.fixture
def protocol(ledger, owner) -> Deployment:
    """Протокол с параметрами по умолчанию (2000 / 300 / 500 bps)."""
    return deploy_protocol(ledger, owner)


@pytest.fixture
def pool(protocol):
    return protocol.pool


@pytest.fixture
def token(protocol):
    return protocol.token


@pytest.fixture
def oracle(protocol):
    return protocol.oracle


@pytest.fixture
def treasury(protocol):
    return protocol.treasury


@pytest.fixture
def funded_pool(pool, user1):
    """Пул со 100 ETH ликвидности от user1."""
    pool.deposit(user1, value=to_wei(100))
    return pool
