"""Outcome crossing: Yes + No books -> one two-sided book for the chosen outcome.

A bid on the complementary outcome at p is economically an ask on the chosen
outcome at 1000 - p:
  - native bids          -> BID, price unchanged
  - complementary bids   -> ASK, price 1000 - p
Asks quoted on either outcome token are not part of the crossed book.
"""

import logging
from collections.abc import Iterable

from src.pm_book.domain.models import CrossedBook, PriceLevel
from src.pm_common.enums import BookSide, Outcome
from src.pm_common.ticks import MAX_TICKS, clamp_ticks, is_valid_ticks

logger = logging.getLogger(__name__)


def size_scale(lot_size: float, decimals: int) -> float:
    """Lot units -> currency units: lot_size / 10**decimals."""
    return lot_size / (10 ** decimals)


def _bids_of(levels: Iterable[PriceLevel], outcome: Outcome) -> list[PriceLevel]:
    return [
        lv for lv in levels
        if lv.side == BookSide.BID and lv.source_outcome == outcome and lv.size > 0
    ]


def _scaled(level: PriceLevel, side: BookSide, price_ticks: int, scale: float) -> PriceLevel:
    if not is_valid_ticks(price_ticks):
        clamped = clamp_ticks(price_ticks)
        logger.warning(
            "Crossed price %d out of range, clamped to %d (%s %s)",
            price_ticks, clamped, level.source_outcome.value, level.side.value,
        )
        price_ticks = clamped
    return PriceLevel(
        side=side,
        price_ticks=price_ticks,
        size=level.size * scale,
        source_outcome=level.source_outcome,
    )


def cross(
    yes_levels: Iterable[PriceLevel],
    no_levels: Iterable[PriceLevel],
    outcome: Outcome,
    scale: float = 1.0,
) -> CrossedBook:
    """Build the crossed book for ``outcome``. Empty inputs give empty sides."""
    yes_levels = list(yes_levels)
    no_levels = list(no_levels)
    native, other = (yes_levels, no_levels) if outcome == Outcome.YES else (no_levels, yes_levels)

    bids = [
        _scaled(lv, BookSide.BID, lv.price_ticks, scale)
        for lv in _bids_of(native, outcome)
    ]
    asks = [
        _scaled(lv, BookSide.ASK, MAX_TICKS - lv.price_ticks, scale)
        for lv in _bids_of(other, outcome.complement)
    ]

    # sorted() is stable, so ties keep their input order
    return CrossedBook(
        outcome=outcome,
        bids=tuple(sorted(bids, key=lambda lv: lv.price_ticks, reverse=True)),
        asks=tuple(sorted(asks, key=lambda lv: lv.price_ticks)),
    )
