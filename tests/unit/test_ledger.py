"""Тесты среды исполнения (Ledger, Contract, Clock).

Coverage:
- Балансы: fund / pay / transfer / send
- Атомарность транзакций: откат балансов, storage и лога событий
- Вложенные транзакции
- Валидация событий по схеме
- Clock
"""

from dataclasses import dataclass

import pytest
from jsonschema import ValidationError

from src.core.domain.events import FundsReceived, Paused
from src.core.errors import InsufficientBalance, Revert
from src.runtime import Clock, Contract, Ledger
from tests.conftest import RejectTransfer, ReentrantReceiver


@dataclass
class CounterStorage:
    value: int = 0


class Counter(Contract):
    def __init__(self, ledger):
        super().__init__(ledger, CounterStorage())

    def increment(self, fail: bool = False):
        with self.ledger.transaction():
            self.storage.value += 1
            self._emit(Paused(account=self.address))
            if fail:
                raise Revert("boom")


class TestBalances:

    def test_fund_and_pay(self, ledger):
        ledger.fund("0xa", 100)
        ledger.pay("0xa", "0xb", 40)

        assert ledger.balance_of("0xa") == 60
        assert ledger.balance_of("0xb") == 40

    def test_pay_insufficient(self, ledger):
        ledger.fund("0xa", 10)
        with pytest.raises(InsufficientBalance) as exc_info:
            ledger.pay("0xa", "0xb", 11)

        assert exc_info.value.balance == 10
        assert exc_info.value.needed == 11

    def test_negative_amount_rejected(self, ledger):
        with pytest.raises(ValueError):
            ledger.fund("0xa", -1)

    def test_transfer_to_rejecting_contract_propagates(self, ledger):
        rejecter = RejectTransfer(ledger)
        ledger.fund("0xa", 10)

        with pytest.raises(Revert, match="rejected"):
            ledger.transfer("0xa", rejecter.address, 5)

        assert ledger.balance_of("0xa") == 10
        assert rejecter.balance == 0

    def test_send_returns_false_and_rolls_back(self, ledger):
        rejecter = RejectTransfer(ledger)
        ledger.fund("0xa", 10)

        assert ledger.send("0xa", rejecter.address, 5) is False
        assert ledger.balance_of("0xa") == 10

    def test_send_insufficient_returns_false(self, ledger):
        assert ledger.send("0xempty", "0xb", 1) is False

    def test_send_calls_receive_hook(self, ledger):
        receiver = ReentrantReceiver(ledger)
        ledger.fund("0xa", 10)

        assert ledger.send("0xa", receiver.address, 7) is True
        assert receiver.storage.received == 7
        assert receiver.balance == 7


class TestTransactions:

    def test_commit(self, ledger):
        counter = Counter(ledger)
        counter.increment()

        assert counter.storage.value == 1
        assert len(ledger.events(Paused)) == 1

    def test_revert_restores_storage_and_logs(self, ledger):
        counter = Counter(ledger)
        counter.increment()

        with pytest.raises(Revert, match="boom"):
            counter.increment(fail=True)

        assert counter.storage.value == 1
        assert len(ledger.events(Paused)) == 1

    def test_revert_restores_balances(self, ledger):
        ledger.fund("0xa", 100)
        with pytest.raises(Revert):
            with ledger.transaction():
                ledger.pay("0xa", "0xb", 60)
                raise Revert()

        assert ledger.balance_of("0xa") == 100
        assert ledger.balance_of("0xb") == 0

    def test_nested_revert_is_independent(self, ledger):
        counter = Counter(ledger)
        with ledger.transaction():
            counter.storage.value = 10
            with pytest.raises(Revert):
                counter.increment(fail=True)
            assert counter.storage.value == 10

        assert counter.storage.value == 10

    def test_non_revert_exception_also_rolls_back(self, ledger):
        counter = Counter(ledger)
        with pytest.raises(KeyError):
            with ledger.transaction():
                counter.storage.value = 5
                raise KeyError("x")

        assert counter.storage.value == 0

    def test_depth(self, ledger):
        assert ledger.depth == 0
        with ledger.transaction():
            assert ledger.depth == 1
            with ledger.transaction():
                assert ledger.depth == 2
        assert ledger.depth == 0


class TestEvents:

    def test_invalid_event_rejected(self, ledger):
        # FundsReceived(amount=0) проходит через model_construct в обход pydantic
        event = FundsReceived.model_construct(sender="0xa", amount=0)
        with pytest.raises(ValidationError):
            ledger.emit("0xa", event)

    def test_validation_can_be_disabled(self):
        ledger = Ledger(clock=Clock(start=0), validate_events=False)
        ledger.emit("0xa", FundsReceived.model_construct(sender="0xa", amount=0))
        assert len(ledger.logs) == 1

    def test_filter_by_emitter(self, ledger):
        first, second = Counter(ledger), Counter(ledger)
        first.increment()
        second.increment()

        assert ledger.events(Paused, emitter=second.address) == [Paused(account=second.address)]
        assert ledger.last_event(Paused) == Paused(account=second.address)
        assert ledger.last_event(FundsReceived) is None

    def test_log_entry_has_block_time(self, ledger):
        Counter(ledger).increment()
        assert ledger.logs[-1].ts == ledger.clock.now


class TestAddresses:

    def test_addresses_unique_and_well_formed(self, ledger):
        a, b = ledger.new_address("x"), ledger.new_address("x")
        assert a != b
        assert a.startswith("0x") and len(a) == 42

    def test_duplicate_registration(self, ledger):
        counter = Counter(ledger)
        with pytest.raises(ValueError, match="already in use"):
            Contract(ledger, CounterStorage(), address=counter.address)

    def test_contract_at(self, ledger):
        counter = Counter(ledger)
        assert ledger.contract_at(counter.address) is counter
        assert ledger.contract_at("0xnobody") is None


class TestClock:

    def test_advance(self):
        clock = Clock(start=100)
        assert clock.advance(50) == 150
        assert clock.now == 150

    def test_cannot_go_backwards(self):
        clock = Clock(start=100)
        with pytest.raises(ValueError):
            clock.advance(-1)
        with pytest.raises(ValueError):
            clock.set(99)

    def test_clock_not_rolled_back(self, ledger):
        start = ledger.clock.now
        with pytest.raises(Revert):
            with ledger.transaction():
                ledger.clock.advance(10)
                raise Revert()

        assert ledger.clock.now == start + 10
