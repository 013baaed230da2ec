"""Pydantic schemas for the book view.

Ask rows are listed high -> low (display order) but each row's
cumulative_notional was accumulated from the best (lowest) ask outward.
"""

from datetime import datetime

from pydantic import BaseModel

from src.pm_book.domain.models import BookDepth, CumulativeLevel
from src.pm_book.engine.depth import depth_fraction
from src.pm_common.enums import LiquidityTier, Outcome, PollingState
from src.pm_common.ticks import ticks_to_cents_display, ticks_to_price


class DepthLevelOut(BaseModel):
    price_ticks: int
    price: float
    price_display: str
    size: float
    source_outcome: Outcome
    cumulative_notional: float
    depth_fraction: float

    @classmethod
    def from_domain(cls, c: CumulativeLevel, max_notional: float) -> "DepthLevelOut":
        return cls(
            price_ticks=c.price_ticks,
            price=ticks_to_price(c.price_ticks),
            price_display=ticks_to_cents_display(c.price_ticks),
            size=c.size,
            source_outcome=c.level.source_outcome,
            cumulative_notional=round(c.cumulative_notional, 6),
            depth_fraction=round(depth_fraction(c, max_notional), 6),
        )


class BookResponse(BaseModel):
    question_id: str | None
    outcome: Outcome
    state: PollingState
    tier: LiquidityTier
    bids: list[DepthLevelOut]
    asks: list[DepthLevelOut]
    best_bid_ticks: int | None
    best_ask_ticks: int | None
    spread_ticks: int | None
    max_notional: float
    last_updated_at: datetime | None

    @classmethod
    def from_depth(
        cls,
        depth: BookDepth,
        question_id: str | None,
        state: PollingState,
        tier: LiquidityTier,
        last_updated_at: datetime | None,
    ) -> "BookResponse":
        return cls(
            question_id=question_id,
            outcome=depth.outcome,
            state=state,
            tier=tier,
            bids=[DepthLevelOut.from_domain(c, depth.max_notional) for c in depth.bids],
            asks=[DepthLevelOut.from_domain(c, depth.max_notional) for c in depth.asks],
            best_bid_ticks=depth.best_bid_ticks,
            best_ask_ticks=depth.best_ask_ticks,
            spread_ticks=depth.spread_ticks,
            max_notional=depth.max_notional,
            last_updated_at=last_updated_at,
        )
