"""Liquidity tiers by summed level size.

NONE: no levels | LOW: < 500 | MED: 500 <= total < 2000 | HIGH: >= 2000
Group tier = maximum child tier (NONE < LOW < MED < HIGH), independent of order.
"""

from collections.abc import Iterable

from src.pm_book.domain.models import PriceLevel
from src.pm_common.enums import LiquidityTier

LOW_MAX_SIZE = 500.0
MED_MAX_SIZE = 2000.0


def classify(levels: Iterable[PriceLevel]) -> LiquidityTier:
    levels = [lv for lv in levels if lv.size > 0]
    if not levels:
        return LiquidityTier.NONE
    total = sum(lv.size for lv in levels)
    if total < LOW_MAX_SIZE:
        return LiquidityTier.LOW
    if total < MED_MAX_SIZE:
        return LiquidityTier.MED
    return LiquidityTier.HIGH


def merge_tiers(tiers: Iterable[LiquidityTier]) -> LiquidityTier:
    return max(tiers, key=lambda t: t.rank, default=LiquidityTier.NONE)


def classify_group(level_sets: Iterable[Iterable[PriceLevel]]) -> LiquidityTier:
    """One level set per sub-market (its combined Yes + No levels)."""
    return merge_tiers(classify(levels) for levels in level_sets)
