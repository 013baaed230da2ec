"""MarketCatalogService: thin composition layer over the upstream catalog.

Keeps the last fetched catalog in memory so selections and group lookups
resolve without a round trip; an unknown id triggers one refresh.
"""

import asyncio
import logging

from config.settings import settings
from src.pm_book.domain.models import PriceLevel
from src.pm_book.engine.liquidity import classify, classify_group
from src.pm_common.datetime_utils import unix_now
from src.pm_common.enums import Outcome
from src.pm_common.errors import MarketGroupNotFoundError, MarketNotFoundError
from src.pm_feed.domain.repository import PriceLevelSourceProtocol, QuestionSourceProtocol
from src.pm_market.application.schemas import (
    GroupLiquidityResponse,
    MarketListItem,
    MarketListResponse,
    MemberLiquidity,
)
from src.pm_market.domain.catalog import filter_live_markets, group_markets
from src.pm_market.domain.models import Market

logger = logging.getLogger(__name__)


class MarketCatalogService:
    def __init__(
        self,
        questions: QuestionSourceProtocol,
        levels: PriceLevelSourceProtocol,
        base_url: str | None = None,
    ) -> None:
        self._questions = questions
        self._levels = levels
        self._base_url = base_url or settings.MARKET_BASE_URL
        self._markets: dict[str, Market] = {}

    async def refresh(self) -> list[Market]:
        markets = await self._questions.fetch_questions(settings.CATALOG_LIMIT)
        self._markets = {m.question_id: m for m in markets}
        return markets

    async def list_live(self, now_ts: int | None = None) -> MarketListResponse:
        now_ts = unix_now() if now_ts is None else now_ts
        markets = await self.refresh()
        live = filter_live_markets(markets, now_ts)
        logger.info("Catalog: %d questions, %d live", len(markets), len(live))
        items = [MarketListItem.from_domain(m, now_ts, self._base_url) for m in live]
        return MarketListResponse(items=items, count=len(items))

    async def get_market(self, question_id: str) -> Market:
        market = self._markets.get(question_id)
        if market is None:
            await self.refresh()
            market = self._markets.get(question_id)
        if market is None:
            raise MarketNotFoundError(question_id)
        return market

    async def describe(self, question_id: str, now_ts: int | None = None) -> MarketListItem:
        now_ts = unix_now() if now_ts is None else now_ts
        market = await self.get_market(question_id)
        return MarketListItem.from_domain(market, now_ts, self._base_url)

    async def group_members(self, group_key: str) -> list[Market]:
        """Sub-markets sharing a parent event (or the lone market for its own id)."""
        if not self._markets:
            await self.refresh()
        members = group_markets(self._markets.values()).get(group_key)
        if not members:
            raise MarketGroupNotFoundError(group_key)
        return members

    async def group_liquidity(self, group_key: str) -> GroupLiquidityResponse:
        """Tier of a parent event = highest tier among its sub-markets."""
        members = await self.group_members(group_key)

        level_sets = await asyncio.gather(*(self._market_levels(m) for m in members))
        out: list[MemberLiquidity] = []
        for market, levels in zip(members, level_sets):
            out.append(
                MemberLiquidity(
                    question_id=market.question_id,
                    tier=classify(levels),
                    total_size=sum(lv.size for lv in levels),
                )
            )
        return GroupLiquidityResponse(
            group_key=group_key,
            tier=classify_group(level_sets),
            members=out,
        )

    async def _market_levels(self, market: Market) -> list[PriceLevel]:
        yes, no = await asyncio.gather(
            self._levels.fetch_levels(market.yes_market_id, Outcome.YES),
            self._levels.fetch_levels(market.no_market_id, Outcome.NO),
        )
        return list(yes) + list(no)
