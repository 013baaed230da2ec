"""Shared test fixtures: in-memory upstream sources, a controller and a catalog over them."""

import asyncio

import pytest

from src.pm_book.domain.models import PriceLevel
from src.pm_common.datetime_utils import unix_now
from src.pm_common.enums import BookSide, Outcome
from src.pm_common.errors import UpstreamFetchError
from src.pm_market.application.service import MarketCatalogService
from src.pm_market.domain.models import Market
from src.pm_polling.controller import PollingController


class FakeLevelSource:
    """PriceLevelSourceProtocol backed by a dict of market_id -> levels.

    ``gates[market_id]`` holds a fetch until the event is set;
    ``fail`` lists market ids that raise UpstreamFetchError.
    """

    def __init__(self, books: dict[str, list[PriceLevel]] | None = None) -> None:
        self.books: dict[str, list[PriceLevel]] = books or {}
        self.gates: dict[str, asyncio.Event] = {}
        self.fail: set[str] = set()
        self.calls: list[tuple[str, Outcome]] = []

    async def fetch_levels(self, market_id: str, outcome: Outcome) -> list[PriceLevel]:
        self.calls.append((market_id, outcome))
        gate = self.gates.get(market_id)
        if gate is not None:
            await gate.wait()
        if market_id in self.fail:
            raise UpstreamFetchError(f"price_levels:{market_id}", "connection reset")
        return list(self.books.get(market_id, []))


class FakeQuestionSource:
    def __init__(self, markets: list[Market]) -> None:
        self.markets = markets
        self.calls = 0

    async def fetch_questions(self, limit: int) -> list[Market]:
        self.calls += 1
        return list(self.markets[:limit])


def make_market(question_id: str = "Q1", **kwargs) -> Market:
    defaults = dict(
        question_id=question_id,
        yes_market_id=f"{question_id}-yes",
        no_market_id=f"{question_id}-no",
        lot_size=1.0,
        decimal=0,
        question_header=f"Team A vs Team B {question_id}",
        category="football",
        end_time=unix_now() + 86400,
    )
    defaults.update(kwargs)
    return Market(**defaults)


def bid(outcome: Outcome, price_ticks: int, size: float) -> PriceLevel:
    return PriceLevel(
        side=BookSide.BID, price_ticks=price_ticks, size=size, source_outcome=outcome
    )


@pytest.fixture
def market() -> Market:
    return make_market("Q1")


@pytest.fixture
def level_source(market: Market) -> FakeLevelSource:
    return FakeLevelSource({
        market.yes_market_id: [bid(Outcome.YES, 600, 100.0), bid(Outcome.YES, 550, 200.0)],
        market.no_market_id: [bid(Outcome.NO, 350, 100.0), bid(Outcome.NO, 300, 300.0)],
    })


@pytest.fixture
def controller(level_source: FakeLevelSource) -> PollingController:
    # Long interval: timer ticks never fire during a test unless a test asks for it
    return PollingController(source=level_source, interval=60)


@pytest.fixture
def catalog(market: Market, level_source: FakeLevelSource) -> MarketCatalogService:
    return MarketCatalogService(
        questions=FakeQuestionSource([market]),
        levels=level_source,
        base_url="https://fliq.test",
    )

