"""
Shares — Share-based vault math

Модуль обеспечивает целочисленную математику долей LP:
- Mint долей при депозите (первый депозит 1:1)
- Конверсия доли → wei при выводе
- Цена доли в WAD

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только целочисленная арифметика, округление floor (в пользу пула)
2. Депозит, дающий 0 долей, не допускается (вызывающая сторона получает 0)
3. Все функции чистые и детерминированные

ФОРМУЛЫ:
    shares_minted = amount                                   (total_shares == 0)
    shares_minted = amount * total_shares // total_assets    (иначе)
    eth_amount    = shares * total_assets // total_shares
    share_price   = total_assets * WAD // total_shares
"""

from src.core.domain.units import WAD


# =============================================================================
# MINT / REDEEM
# =============================================================================


def shares_for_deposit(amount: int, total_shares: int, total_assets: int) -> int:
    """
    Количество долей для депозита.

    Args:
        amount: Сумма депозита (wei)
        total_shares: Доли до депозита
        total_assets: Учтённый капитал до депозита (wei)

    Returns:
        Количество долей (может быть 0 при крошечном депозите в большой пул)

    Examples:
        >>> shares_for_deposit(100, 0, 0)
        100
        >>> shares_for_deposit(10, 100, 200)
        5
        >>> shares_for_deposit(1, 100, 1000)
        0
    """
    if total_shares == 0:
        return amount

    if total_assets == 0:
        # Все активы выплачены, доли остались: депозит не может быть оценён
        return 0

    return amount * total_shares // total_assets


def assets_for_shares(shares: int, total_shares: int, total_assets: int) -> int:
    """
    Сумма в wei, соответствующая количеству долей.

    Args:
        shares: Количество долей
        total_shares: Всего долей
        total_assets: Учтённый капитал (wei)

    Returns:
        floor(shares * total_assets / total_shares), 0 если долей нет

    Examples:
        >>> assets_for_shares(50, 100, 201)
        100
        >>> assets_for_shares(0, 0, 0)
        0
    """
    if total_shares == 0:
        return 0

    return shares * total_assets // total_shares


def share_price(total_shares: int, total_assets: int) -> int:
    """
    Цена одной доли в WAD (1e18 = 1 wei за долю).

    Returns:
        total_assets * WAD // total_shares; WAD для пустого пула
    """
    if total_shares == 0:
        return WAD

    return total_assets * WAD // total_shares
