"""httpx client for the venue's public catalog and price-level APIs.

Endpoints used (public, no auth):
  GET {QUESTION_API_URL}/question?select=...&limit=N   -- market catalog
  GET {DSS_API_URL}/price_levels?and=(market_id.in.(ID),direction.eq.bid)&order=price.desc&limit=N
  GET {DSS_API_URL}/price_levels?and=(market_id.in.(ID),direction.eq.ask)&order=price.asc&limit=N
"""

import asyncio
import logging
from typing import Any

import httpx

from config.settings import settings
from src.pm_book.domain.models import PriceLevel
from src.pm_common.enums import BookSide, Outcome
from src.pm_common.errors import UpstreamFetchError
from src.pm_feed.application.schemas import parse_levels, parse_questions
from src.pm_market.domain.models import Market

logger = logging.getLogger(__name__)

_QUESTION_FIELDS = (
    "questionId", "lotSize", "tickSize", "decimal", "isSettled",
    "settlementPrice", "contractAddress", "yesTokenMarketId", "noTokenMarketId",
    "blockchainMetadata", "category",
)


class FliqClient:
    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        question_api_url: str | None = None,
        dss_api_url: str | None = None,
        level_limit: int | None = None,
    ) -> None:
        self._http = http or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._question_api_url = (question_api_url or settings.QUESTION_API_URL).rstrip("/")
        self._dss_api_url = (dss_api_url or settings.DSS_API_URL).rstrip("/")
        self._level_limit = level_limit or settings.PRICE_LEVEL_LIMIT

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get(self, url: str, params: Any, source: str) -> Any:
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = await self._http.get(url, params=params)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(source, str(exc) or type(exc).__name__) from exc
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamFetchError(source, f"invalid JSON: {exc}") from exc

    # ── Catalog ──────────────────────────────────────────────────────

    async def fetch_questions(self, limit: int | None = None) -> list[Market]:
        params: list[tuple[str, str]] = [("select", f) for f in _QUESTION_FIELDS]
        params += [
            ("limit", str(limit or settings.CATALOG_LIMIT)),
            ("sortBy", "questionEndTime"),
            ("sortOrder", "asc"),
            ("isSettled", "false"),
        ]
        body = await self._get(f"{self._question_api_url}/question", params, "questions")
        markets = parse_questions(body)
        logger.info("Fetched %d questions", len(markets))
        return markets

    # ── Price levels ─────────────────────────────────────────────────

    def _level_params(self, market_id: str, direction: str) -> dict[str, str]:
        order = "price.desc" if direction == "bid" else "price.asc"
        return {
            "and": f"(market_id.in.({market_id}),direction.eq.{direction})",
            "order": order,
            "limit": str(self._level_limit),
        }

    async def fetch_levels(self, market_id: str, outcome: Outcome) -> list[PriceLevel]:
        """Bids and asks of one outcome token, fetched concurrently."""
        url = f"{self._dss_api_url}/price_levels"
        source = f"price_levels:{market_id}"
        bids_raw, asks_raw = await asyncio.gather(
            self._get(url, self._level_params(market_id, "bid"), source),
            self._get(url, self._level_params(market_id, "ask"), source),
        )
        return parse_levels(bids_raw, BookSide.BID, outcome) + parse_levels(
            asks_raw, BookSide.ASK, outcome
        )


_client: FliqClient | None = None


async def get_fliq_client() -> FliqClient:
    """Get or create the shared upstream client."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = FliqClient()
    return _client


async def close_fliq_client() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None
