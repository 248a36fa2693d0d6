"""
Units — Централизованный модуль конверсии денежных единиц пула

Все суммы внутри пула — целые числа в wei (18 знаков после запятой).
Доли LP — тоже 18-decimal fixed point. Basis points — целые, BPS = 10000.

Единственный допустимый способ преобразований между:
- wei (int, внутреннее представление)
- ether (Decimal, человекочитаемое)
- bps (int, доля от BPS)

ЗАПРЕЩЕНО использовать float для сумм: округление только floor-делением.
"""

from decimal import Decimal, localcontext
from typing import Final, Union


# =============================================================================
# КОНСТАНТЫ
# =============================================================================
# Знаменатель basis points (10000 = 100%)
BPS: Final[int] = 10_000

# 1 ether в wei, он же масштаб цены доли
WAD: Final[int] = 10**18

# Время (секунды)
DAY: Final[int] = 24 * 60 * 60
WEEK: Final[int] = 7 * DAY

# Верхняя граница длительности полиса (7 дней допустимо, 100 дней — нет)
MAX_POLICY_DURATION: Final[int] = 30 * DAY


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def to_wei(amount: Union[int, str, Decimal]) -> int:
    """
    Конверсия: ether → wei

    Args:
        amount: Сумма в ether ("1.5", Decimal("0.03"), 100)

    Returns:
        Сумма в wei (int)

    Raises:
        ValueError: Если сумма отрицательная или дробнее 1 wei
    """
    if isinstance(amount, float):
        raise ValueError(f"Float amounts are not allowed: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = 78
        value = Decimal(amount) * WAD

    if value < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
    if value != value.to_integral_value():
        raise ValueError(f"Amount {amount} has more than 18 decimals")

    return int(value)


def from_wei(amount_wei: int) -> Decimal:
    """
    Конверсия: wei → ether

    Args:
        amount_wei: Сумма в wei

    Returns:
        Сумма в ether (Decimal, точная)
    """
    with localcontext() as ctx:
        ctx.prec = 78
        return Decimal(amount_wei) / WAD


def bps_of(amount: int, bps: int) -> int:
    """
    Доля суммы в basis points с floor-округлением.

    amount * bps // BPS — единственная формула процента во всём пуле.

    Args:
        amount: Сумма в wei
        bps: Basis points (например, 300 = 3%)

    Returns:
        floor(amount * bps / BPS)
    """
    return amount * bps // BPS


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_bps(value: int) -> bool:
    """
    Проверка параметра basis points: 0 < value <= BPS.

    Args:
        value: Значение в basis points

    Returns:
        True если значение допустимо
    """
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= BPS


def validate_amount(amount: int) -> None:
    """
    Проверка суммы в wei.

    Args:
        amount: Сумма в wei

    Raises:
        ValueError: Если сумма не int или отрицательная
    """
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise ValueError(f"Amount must be an integer number of wei: {amount!r}")

    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
