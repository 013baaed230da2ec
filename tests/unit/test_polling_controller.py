"""Tests for PollingController — state machine, epochs and refresh scheduling.

Uses FakeLevelSource from tests/conftest.py; a gate (asyncio.Event) holds a
fetch in flight so the test can switch markets underneath it.
"""

import asyncio
import contextlib

import pytest

from src.pm_book.domain.models import PriceLevel
from src.pm_common.enums import BookSide, LiquidityTier, Outcome, PollingState
from src.pm_common.errors import NoMarketSelectedError
from src.pm_market.domain.models import Market
from src.pm_polling.controller import PollingController


def _market(question_id: str) -> Market:
    return Market(
        question_id=question_id,
        yes_market_id=f"{question_id}-yes",
        no_market_id=f"{question_id}-no",
        lot_size=1.0,
        decimal=0,
    )


def _bid(outcome: Outcome, price: int, size: float) -> PriceLevel:
    return PriceLevel(side=BookSide.BID, price_ticks=price, size=size, source_outcome=outcome)


async def _wait_until(predicate, timeout: float = 2.0) -> None:
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.005)


class TestSelectMarket:
    @pytest.mark.asyncio
    async def test_first_fetch_starts_polling(self, level_source, market: Market) -> None:
        controller = PollingController(source=level_source, interval=60)
        assert controller.state == PollingState.IDLE

        await controller.select_market(market)

        assert controller.state == PollingState.POLLING
        assert controller.epoch == 1
        snap = controller.snapshot
        assert snap is not None
        assert snap.question_id == market.question_id
        assert len(snap.yes_levels) == 2
        assert len(snap.no_levels) == 2
        # 100 + 200 + 100 + 300 = 700 -> MED
        assert snap.tier == LiquidityTier.MED
        assert controller.has_pending_refresh
        fetched = {mid for mid, _ in level_source.calls}
        assert fetched == {market.yes_market_id, market.no_market_id}
        await controller.aclose()

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self, level_source) -> None:
        a, b = _market("A"), _market("B")
        level_source.books["A-yes"] = [_bid(Outcome.YES, 600, 100)]
        level_source.books["B-yes"] = [_bid(Outcome.YES, 300, 50)]
        gate = asyncio.Event()
        level_source.gates["A-yes"] = gate
        controller = PollingController(source=level_source, interval=60)

        slow = asyncio.create_task(controller.select_market(a))
        await asyncio.sleep(0)  # A's fetch is now in flight
        await controller.select_market(b)
        gate.set()
        await slow

        assert controller.epoch == 2
        assert controller.market == b
        assert controller.snapshot is not None
        assert controller.snapshot.question_id == "B"
        assert controller.snapshot.yes_levels[0].price_ticks == 300
        await controller.aclose()

    @pytest.mark.asyncio
    async def test_switch_cancels_pending_timer(self, level_source, market: Market) -> None:
        controller = PollingController(source=level_source, interval=60)
        await controller.select_market(market)
        timer = controller._timer
        assert timer is not None

        await controller.select_market(_market("OTHER"))
        with contextlib.suppress(asyncio.CancelledError):
            await timer
        assert timer.cancelled()
        await controller.aclose()

    @pytest.mark.asyncio
    async def test_empty_book_pauses(self, level_source) -> None:
        controller = PollingController(source=level_source, interval=60)
        await controller.select_market(_market("EMPTY"))

        assert controller.state == PollingState.PAUSED
        assert controller.auto_refresh is False
        assert not controller.has_pending_refresh
        assert controller.snapshot is not None
        assert controller.snapshot.is_empty
        assert controller.status().current_tier == LiquidityTier.NONE


class TestFailures:
    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_last_snapshot(self, level_source, market: Market) -> None:
        controller = PollingController(source=level_source, interval=60)
        await controller.select_market(market)
        before = controller.snapshot

        level_source.fail.add(market.yes_market_id)
        await controller.resume()

        assert controller.snapshot is before
        status = controller.status()
        assert status.last_error is not None
        assert "connection reset" in status.last_error
        assert controller.state == PollingState.POLLING
        assert controller.has_pending_refresh
        await controller.aclose()

    @pytest.mark.asyncio
    async def test_failure_on_first_fetch(self, level_source, market: Market) -> None:
        level_source.fail.add(market.no_market_id)
        controller = PollingController(source=level_source, interval=60)
        await controller.select_market(market)

        assert controller.snapshot is None
        assert controller.status().last_error is not None
        await controller.aclose()


class TestCommands:
    @pytest.mark.asyncio
    async def test_resume_without_selection(self, level_source) -> None:
        controller = PollingController(source=level_source, interval=60)
        with pytest.raises(NoMarketSelectedError):
            await controller.resume()

    @pytest.mark.asyncio
    async def test_resume_after_empty_book(self, level_source) -> None:
        controller = PollingController(source=level_source, interval=60)
        m = _market("LATE")
        await controller.select_market(m)
        assert controller.state == PollingState.PAUSED

        level_source.books["LATE-yes"] = [_bid(Outcome.YES, 450, 10)]
        await controller.resume()

        assert controller.state == PollingState.POLLING
        assert controller.auto_refresh is True
        assert controller.snapshot.tier == LiquidityTier.LOW
        await controller.aclose()

    @pytest.mark.asyncio
    async def test_disable_auto_refresh(self, level_source, market: Market) -> None:
        controller = PollingController(source=level_source, interval=60)
        await controller.select_market(market)

        await controller.set_auto_refresh(False)

        assert controller.state == PollingState.PAUSED
        assert not controller.has_pending_refresh
        assert controller.snapshot is not None  # last book stays visible

        await controller.set_auto_refresh(True)
        assert controller.state == PollingState.POLLING
        assert controller.has_pending_refresh
        await controller.aclose()

    @pytest.mark.asyncio
    async def test_stop(self, level_source, market: Market) -> None:
        controller = PollingController(source=level_source, interval=60)
        await controller.select_market(market)
        await controller.stop()

        status = controller.status()
        assert status.state == PollingState.IDLE
        assert status.question_id is None
        assert controller.snapshot is None
        assert not controller.has_pending_refresh
        assert controller.epoch == 2


class TestScheduling:
    @pytest.mark.asyncio
    async def test_timer_refreshes_repeatedly(self, level_source, market: Market) -> None:
        controller = PollingController(source=level_source, interval=0.01)
        await controller.select_market(market)

        await _wait_until(lambda: controller.status().fetch_count >= 3)

        assert controller.state == PollingState.POLLING
        assert controller.epoch == 1
        await controller.aclose()
        assert not controller.has_pending_refresh

    @pytest.mark.asyncio
    async def test_no_refresh_while_paused(self, level_source, market: Market) -> None:
        controller = PollingController(source=level_source, interval=0.01)
        await controller.select_market(market)
        await controller.set_auto_refresh(False)
        calls = len(level_source.calls)

        await asyncio.sleep(0.05)

        assert len(level_source.calls) == calls
