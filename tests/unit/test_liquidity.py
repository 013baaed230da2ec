"""Tests for pm_book.engine.liquidity."""

from itertools import permutations

from src.pm_book.domain.models import PriceLevel
from src.pm_book.engine.liquidity import classify, classify_group, merge_tiers
from src.pm_common.enums import BookSide, LiquidityTier, Outcome


def _lv(size: float, outcome: Outcome = Outcome.YES) -> PriceLevel:
    return PriceLevel(side=BookSide.BID, price_ticks=500, size=size, source_outcome=outcome)


class TestClassify:
    def test_empty_is_none(self) -> None:
        assert classify([]) == LiquidityTier.NONE

    def test_only_zero_sizes_is_none(self) -> None:
        assert classify([_lv(0), _lv(0)]) == LiquidityTier.NONE

    def test_thresholds(self) -> None:
        assert classify([_lv(499)]) == LiquidityTier.LOW
        assert classify([_lv(500)]) == LiquidityTier.MED
        assert classify([_lv(1999)]) == LiquidityTier.MED
        assert classify([_lv(2000)]) == LiquidityTier.HIGH

    def test_sums_across_levels_and_outcomes(self) -> None:
        levels = [_lv(300), _lv(150, Outcome.NO), _lv(100, Outcome.NO)]
        assert classify(levels) == LiquidityTier.MED


class TestMergeTiers:
    def test_max_regardless_of_order(self) -> None:
        tiers = [LiquidityTier.LOW, LiquidityTier.HIGH, LiquidityTier.MED]
        for perm in permutations(tiers):
            assert merge_tiers(perm) == LiquidityTier.HIGH

    def test_empty_is_none(self) -> None:
        assert merge_tiers([]) == LiquidityTier.NONE

    def test_group(self) -> None:
        assert classify_group([[_lv(10)], [], [_lv(600)]]) == LiquidityTier.MED
        assert classify_group([]) == LiquidityTier.NONE
