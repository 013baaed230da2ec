"""Live-market filtering and labels for the question catalog."""

import re
from collections.abc import Iterable

from src.pm_market.domain.models import Market

# Rapid price-prediction markets are not worth mirroring
EXCLUDED_CATEGORIES = frozenset({"5 min", "15 min", "up down"})
EXCLUDED_TAG_MARKERS = ("btc", "eth", "5 min", "15 min")
EXCLUDED_HEADER_KEYWORDS = ("passes", "pass against")

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def is_live(market: Market, now_ts: int) -> bool:
    if market.category.lower() in EXCLUDED_CATEGORIES:
        return False
    tags = [t.lower() for t in market.tags]
    if any(marker in t for t in tags for marker in EXCLUDED_TAG_MARKERS):
        return False
    headers = " ".join(
        h for h in (
            market.question_header,
            market.parent_question_header,
            market.question_header_expanded,
        ) if h
    ).lower()
    if any(kw in headers for kw in EXCLUDED_HEADER_KEYWORDS):
        return False
    if market.is_settled or market.end_time is None:
        return False
    return market.end_time > now_ts


def filter_live_markets(markets: Iterable[Market], now_ts: int) -> list[Market]:
    """Live markets ending soonest first, one entry per parent event."""
    live = sorted(
        (m for m in markets if is_live(m, now_ts)),
        key=lambda m: m.end_time or 0,
    )
    seen: set[str] = set()
    out: list[Market] = []
    for m in live:
        if m.group_key in seen:
            continue
        seen.add(m.group_key)
        out.append(m)
    return out


def group_markets(markets: Iterable[Market]) -> dict[str, list[Market]]:
    groups: dict[str, list[Market]] = {}
    for m in markets:
        groups.setdefault(m.group_key, []).append(m)
    return groups


def slugify(text: str) -> str:
    return _SLUG_STRIP.sub("-", text.lower()).strip("-")


def market_link(market: Market, base_url: str) -> str:
    """Venue page: /multi-question/<slug>-<parentId> or /question/<slug>-<questionId>."""
    if market.is_multi_question:
        header = market.parent_question_header or market.question_header
        return f"{base_url.rstrip('/')}/multi-question/{slugify(header)}-{market.parent_question_id}"
    return f"{base_url.rstrip('/')}/question/{slugify(market.question_header)}-{market.question_id}"


def format_time_left(end_ts: int, now_ts: int) -> str:
    diff = end_ts - now_ts
    if diff <= 0:
        return "Ended"
    mins = diff // 60
    hours = diff // 3600
    days = diff // 86400
    if days >= 30:
        return f"{days // 30}mo {days % 30}d"
    if days >= 1:
        return f"{days}d {hours % 24}h"
    if hours >= 1:
        return f"{hours}h {mins % 60}m"
    return f"{mins}m"
