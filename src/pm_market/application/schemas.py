"""Pydantic schemas for pm_market API responses."""

from datetime import datetime, timezone

from pydantic import BaseModel

from src.pm_common.enums import LiquidityTier
from src.pm_market.domain.catalog import format_time_left, market_link
from src.pm_market.domain.models import Market


def _iso(ts: int | None) -> str | None:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


class MarketListItem(BaseModel):
    question_id: str
    title: str
    category: str
    group_key: str
    yes_market_id: str
    no_market_id: str
    lot_size: float
    decimal: int
    size_scale: float
    end_time: int | None
    end_time_iso: str | None
    time_left: str | None
    link: str

    @classmethod
    def from_domain(cls, m: Market, now_ts: int, base_url: str) -> "MarketListItem":
        return cls(
            question_id=m.question_id,
            title=m.title,
            category=m.category or "Unknown",
            group_key=m.group_key,
            yes_market_id=m.yes_market_id,
            no_market_id=m.no_market_id,
            lot_size=m.lot_size,
            decimal=m.decimal,
            size_scale=m.size_scale,
            end_time=m.end_time,
            end_time_iso=_iso(m.end_time),
            time_left=format_time_left(m.end_time, now_ts) if m.end_time is not None else None,
            link=market_link(m, base_url),
        )


class MarketListResponse(BaseModel):
    items: list[MarketListItem]
    count: int


class MemberLiquidity(BaseModel):
    question_id: str
    tier: LiquidityTier
    total_size: float


class GroupLiquidityResponse(BaseModel):
    group_key: str
    tier: LiquidityTier
    members: list[MemberLiquidity]
