"""Domain models for pm_book — frozen dataclasses, no business logic."""

from dataclasses import dataclass

from src.pm_common.enums import BookSide, Outcome
from src.pm_common.ticks import ticks_to_price


@dataclass(frozen=True)
class PriceLevel:
    """Single normalized book entry."""

    side: BookSide
    price_ticks: int  # 0-1000
    size: float  # >= 0; 0 means absent
    source_outcome: Outcome

    @property
    def price(self) -> float:
        return ticks_to_price(self.price_ticks)

    @property
    def notional(self) -> float:
        return self.price * self.size


@dataclass(frozen=True)
class CumulativeLevel:
    """PriceLevel plus running notional measured from the best price outward."""

    level: PriceLevel
    cumulative_notional: float

    @property
    def price_ticks(self) -> int:
        return self.level.price_ticks

    @property
    def size(self) -> float:
        return self.level.size


@dataclass(frozen=True)
class CrossedBook:
    """Two-sided book for one trading outcome."""

    outcome: Outcome
    bids: tuple[PriceLevel, ...] = ()  # descending by price
    asks: tuple[PriceLevel, ...] = ()  # ascending by price

    @property
    def is_empty(self) -> bool:
        return not self.bids and not self.asks


@dataclass(frozen=True)
class BookDepth:
    """Accumulated view of a CrossedBook ready for display."""

    outcome: Outcome
    bids: tuple[CumulativeLevel, ...]  # best (highest) first
    asks: tuple[CumulativeLevel, ...]  # descending by price, cumulative from best ask
    max_notional: float  # depth-bar scale
    best_bid_ticks: int | None
    best_ask_ticks: int | None

    @property
    def spread_ticks(self) -> int | None:
        if self.best_bid_ticks is None or self.best_ask_ticks is None:
            return None
        return self.best_ask_ticks - self.best_bid_ticks
