"""
Fees — FeeSplitter и формулы ценообразования полиса

ФОРМУЛЫ (floor-деление во всех точках вызова):
    premium       = coverage * premium_rate_bps // BPS
    protocol_fee  = premium * protocol_fee_bps // BPS
    net_premium   = premium - protocol_fee
    coverage_cap  = available_liquidity * max_coverage_bps // BPS

Остаток от floor-деления нигде не перераспределяется: он остаётся
неучтённым (net_premium + protocol_fee == premium всегда выполняется,
теряется только точность самой комиссии).
"""

from typing import NamedTuple

from src.core.domain.units import bps_of


class PremiumSplit(NamedTuple):
    """Разделение премии между пулом и Treasury."""

    net_premium: int
    protocol_fee: int


def split_premium(premium: int, protocol_fee_bps: int) -> PremiumSplit:
    """
    Разделение премии на net premium (остаётся в пуле) и комиссию протокола.

    Args:
        premium: Оплаченная премия (wei)
        protocol_fee_bps: Комиссия протокола (bps)

    Returns:
        PremiumSplit(net_premium, protocol_fee)

    Examples:
        >>> split_premium(30_000_000_000_000_000, 500)
        PremiumSplit(net_premium=28500000000000000, protocol_fee=1500000000000000)
        >>> split_premium(19, 500)
        PremiumSplit(net_premium=19, protocol_fee=0)
    """
    protocol_fee = bps_of(premium, protocol_fee_bps)
    return PremiumSplit(net_premium=premium - protocol_fee, protocol_fee=protocol_fee)


def required_premium(coverage: int, premium_rate_bps: int) -> int:
    """
    Требуемая премия за покрытие.

    Examples:
        >>> required_premium(10**18, 300)
        30000000000000000
    """
    return bps_of(coverage, premium_rate_bps)


def coverage_cap(available_liquidity: int, max_coverage_bps: int) -> int:
    """
    Максимальное покрытие одного полиса.

    Пустой пул даёт лимит 0.
    """
    if available_liquidity <= 0:
        return 0

    return bps_of(available_liquidity, max_coverage_bps)
