"""Cumulative depth aggregation.

Depth is dollar exposure (price * size), not share count, and is always
measured from the best price outward: highest bid first, lowest ask first.
"""

from collections.abc import Sequence

from src.pm_book.domain.models import BookDepth, CrossedBook, CumulativeLevel, PriceLevel
from src.pm_common.enums import BookSide


def canonical_order(levels: Sequence[PriceLevel]) -> list[PriceLevel]:
    """Best-first: bids descending, asks ascending. Mixed input is ordered by its first level's side."""
    if not levels:
        return []
    descending = levels[0].side == BookSide.BID
    return sorted(levels, key=lambda lv: lv.price_ticks, reverse=descending)


def accumulate(levels: Sequence[PriceLevel]) -> list[CumulativeLevel]:
    running = 0.0
    out: list[CumulativeLevel] = []
    for lv in canonical_order(levels):
        if lv.size <= 0:
            continue
        running += lv.price_ticks / 1000 * lv.size
        out.append(CumulativeLevel(level=lv, cumulative_notional=running))
    return out


def build_depth(book: CrossedBook) -> BookDepth:
    bids = accumulate(book.bids)
    asks_walk = accumulate(book.asks)
    # Display only: asks shown high -> low; values stay from the ascending walk
    asks_display = sorted(asks_walk, key=lambda c: c.price_ticks, reverse=True)

    max_notional = max(
        (bids[-1].cumulative_notional if bids else 0.0),
        (asks_walk[-1].cumulative_notional if asks_walk else 0.0),
    )
    return BookDepth(
        outcome=book.outcome,
        bids=tuple(bids),
        asks=tuple(asks_display),
        max_notional=max_notional,
        best_bid_ticks=bids[0].price_ticks if bids else None,
        best_ask_ticks=asks_walk[0].price_ticks if asks_walk else None,
    )


def depth_fraction(level: CumulativeLevel, max_notional: float) -> float:
    """Bar width in [0, 1] for a level; 0 when the book is empty."""
    if max_notional <= 0:
        return 0.0
    return min(1.0, level.cumulative_notional / max_notional)
