"""
Core math modules пула

Целочисленные примитивы share-based vault и ценообразования полисов.
"""

# Shares (vault math)
from src.core.math.shares import (
    assets_for_shares,
    share_price,
    shares_for_deposit,
)

# Fees (FeeSplitter)
from src.core.math.fees import (
    PremiumSplit,
    coverage_cap,
    required_premium,
    split_premium,
)

__all__ = [
    # Shares
    "assets_for_shares",
    "share_price",
    "shares_for_deposit",
    # Fees — Types
    "PremiumSplit",
    # Fees — Functions
    "coverage_cap",
    "required_premium",
    "split_premium",
]
