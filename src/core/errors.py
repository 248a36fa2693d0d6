"""
Reverts — таксономия ошибок пула

Каждая ошибка — отдельный класс, чтобы вызывающая сторона (и тесты) могли
однозначно определить причину отказа. Любая ошибка из этого модуля означает
полный откат операции: ни одно изменение состояния, ни один перевод и ни одно
событие не фиксируются.

Все классы наследуются от Revert — Ledger перехватывает именно Revert при
low-level вызовах (send) и превращает его в результат False.
"""

from typing import Optional


class Revert(Exception):
    """
    Базовая ошибка отката транзакции.

    Сообщение по умолчанию — имя класса, чтобы `str(exc)` оставалось
    информативным даже без аргументов.
    """

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.__class__.__name__)


# =============================================================================
# VAULT / LIFECYCLE
# =============================================================================


class ZeroValue(Revert):
    """Нулевая сумма депозита, долей или покрытия."""


class AmountNotEnough(Revert):
    """Депозит слишком мал: округление даёт 0 долей."""


class NoLiquidity(Revert):
    """Недостаточно долей или свободной (незаблокированной) ликвидности."""


class DurationOutOfRange(Revert):
    """Длительность полиса вне диапазона (0, MAX_POLICY_DURATION]."""


class CoverageLimitExceeded(Revert):
    """Покрытие превышает availableLiquidity * maxCoverageBps / BPS."""


class WrongPremium(Revert):
    """Оплаченная премия не равна требуемой (строгое равенство)."""


class PolicyNotFound(Revert):
    """Полис с таким id не существует."""


class AlreadyResolved(Revert):
    """Полис уже закрыт (resolve или expire)."""


class PolicyNotExpired(Revert):
    """Срок полиса ещё не истёк (now < end)."""


class InvalidBPS(Revert):
    """Параметр в basis points вне диапазона (0, BPS]."""


class TransferFailed(Revert):
    """Исходящий перевод отклонён получателем или превышает баланс."""


# =============================================================================
# ACCESS CONTROL / PAUSE
# =============================================================================


class OwnableUnauthorizedAccount(Revert):
    """Вызов owner-only операции не владельцем."""

    def __init__(self, account: str):
        self.account = account
        super().__init__(f"OwnableUnauthorizedAccount: {account}")


class OwnableInvalidOwner(Revert):
    """Недопустимый адрес нового владельца (пустой или нулевой)."""


class EnforcedPause(Revert):
    """Операция запрещена, пока пул на паузе."""


class ExpectedPause(Revert):
    """unpause() вызван, когда пул не на паузе."""


# =============================================================================
# COLLABORATORS
# =============================================================================


class NotInsurancePool(Revert):
    """mint() вызван не привязанным пулом."""


class ZeroAmount(Revert):
    """Treasury: нулевая сумма поступления или вывода."""


class NonexistentToken(Revert):
    """Токен владения полисом не существует."""

    def __init__(self, token_id: int):
        self.token_id = token_id
        super().__init__(f"NonexistentToken: {token_id}")


class IncorrectTokenOwner(Revert):
    """transferFrom() от имени, не владеющего токеном."""


class InvalidReceiver(Revert):
    """transferFrom() на нулевой или пустой адрес."""


# =============================================================================
# LEDGER
# =============================================================================


class InsufficientBalance(Revert):
    """У отправителя недостаточно нативного баланса."""

    def __init__(self, address: str, balance: int, needed: int):
        self.address = address
        self.balance = balance
        self.needed = needed
        super().__init__(
            f"InsufficientBalance: {address} has {balance}, needs {needed}"
        )
