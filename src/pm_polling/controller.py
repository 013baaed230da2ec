"""PollingController — refreshes the Yes/No books of the selected market.

States:
  IDLE      nothing selected
  FETCHING  market just selected (or resumed), first fetch in flight
  POLLING   last fetch had levels; next fetch scheduled after the interval
  PAUSED    book was empty, or auto-refresh was switched off

Every market switch bumps ``epoch``. A fetch remembers the epoch it was issued
under and its result is dropped if the epoch has moved on, so a slow response
for an old market can never overwrite the current one. In-flight HTTP calls
are not aborted; only the pending timer sleep is cancelled.
"""

import asyncio
import logging

from config.settings import settings
from src.pm_book.engine.liquidity import classify
from src.pm_common.datetime_utils import utc_now
from src.pm_common.enums import LiquidityTier, Outcome, PollingState
from src.pm_common.errors import NoMarketSelectedError, UpstreamFetchError
from src.pm_feed.domain.repository import PriceLevelSourceProtocol
from src.pm_market.domain.models import Market
from src.pm_polling.domain.models import BookSnapshot, PollingStatus

logger = logging.getLogger(__name__)


class PollingController:
    def __init__(
        self, source: PriceLevelSourceProtocol, interval: float | None = None
    ) -> None:
        self._source = source
        self._interval = settings.POLL_INTERVAL_SECONDS if interval is None else interval
        self._state = PollingState.IDLE
        self._market: Market | None = None
        self._epoch = 0
        self._auto_refresh = True
        self._snapshot: BookSnapshot | None = None
        self._last_error: str | None = None
        self._timer: asyncio.Task[None] | None = None
        # Fetch sequence within an epoch; an older response never replaces a newer one
        self._issued_seq = 0
        self._applied_seq = 0
        self._fetch_count = 0

    # ── Observable state ─────────────────────────────────────────────

    @property
    def state(self) -> PollingState:
        return self._state

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def market(self) -> Market | None:
        return self._market

    @property
    def snapshot(self) -> BookSnapshot | None:
        return self._snapshot

    @property
    def auto_refresh(self) -> bool:
        return self._auto_refresh

    @property
    def has_pending_refresh(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def status(self) -> PollingStatus:
        snap = self._snapshot
        return PollingStatus(
            state=self._state,
            question_id=self._market.question_id if self._market else None,
            current_tier=snap.tier if snap else LiquidityTier.NONE,
            last_updated_at=snap.fetched_at if snap else None,
            is_polling=self._state == PollingState.POLLING,
            auto_refresh=self._auto_refresh,
            epoch=self._epoch,
            last_error=self._last_error,
            fetch_count=self._fetch_count,
        )

    # ── Commands ─────────────────────────────────────────────────────

    async def select_market(self, market: Market) -> None:
        """Restart the state machine for ``market`` and fetch immediately."""
        self._epoch += 1
        self._cancel_timer()
        self._market = market
        self._snapshot = None  # no stale display while the new book loads
        self._last_error = None
        self._auto_refresh = True
        self._state = PollingState.FETCHING
        logger.info("Selected market %s (epoch=%d)", market.question_id, self._epoch)
        await self._refresh(self._epoch)

    async def resume(self) -> None:
        """Re-enable auto-refresh and fetch once right away."""
        if self._market is None:
            raise NoMarketSelectedError()
        self._cancel_timer()
        self._auto_refresh = True
        logger.info("Resuming refresh for %s", self._market.question_id)
        await self._refresh(self._epoch)

    async def set_auto_refresh(self, enabled: bool) -> None:
        if enabled:
            await self.resume()
            return
        self._auto_refresh = False
        self._cancel_timer()
        if self._market is not None:
            self._state = PollingState.PAUSED

    async def stop(self) -> None:
        """Drop the selection. Any in-flight fetch will be discarded."""
        self._epoch += 1
        self._cancel_timer()
        self._market = None
        self._snapshot = None
        self._last_error = None
        self._state = PollingState.IDLE

    async def aclose(self) -> None:
        await self.stop()

    # ── Fetch cycle ──────────────────────────────────────────────────

    async def _refresh(self, epoch: int) -> None:
        market = self._market
        if market is None:
            return
        self._issued_seq += 1
        seq = self._issued_seq

        try:
            # Both outcomes in flight together, joined before use
            yes_levels, no_levels = await asyncio.gather(
                self._source.fetch_levels(market.yes_market_id, Outcome.YES),
                self._source.fetch_levels(market.no_market_id, Outcome.NO),
            )
        except UpstreamFetchError as exc:
            if epoch != self._epoch:
                logger.debug("Dropping failed fetch for stale epoch %d", epoch)
                return
            logger.warning("Book fetch failed for %s: %s", market.question_id, exc.message)
            self._last_error = exc.message
            self._after_fetch(epoch)
            return

        if epoch != self._epoch:
            logger.debug(
                "Discarding response for %s from epoch %d (current %d)",
                market.question_id, epoch, self._epoch,
            )
            return
        if seq < self._applied_seq:
            logger.debug("Discarding out-of-order response seq=%d", seq)
            return

        all_levels = list(yes_levels) + list(no_levels)
        self._snapshot = BookSnapshot(
            question_id=market.question_id,
            epoch=epoch,
            yes_levels=tuple(yes_levels),
            no_levels=tuple(no_levels),
            tier=classify(all_levels),
            fetched_at=utc_now(),
        )
        self._applied_seq = seq
        self._last_error = None
        self._fetch_count += 1

        if self._snapshot.is_empty:
            logger.info("Empty book for %s, pausing auto-refresh", market.question_id)
            self._auto_refresh = False
            self._cancel_timer()
            self._state = PollingState.PAUSED
            return
        self._after_fetch(epoch)

    def _after_fetch(self, epoch: int) -> None:
        if self._auto_refresh:
            self._state = PollingState.POLLING
            self._schedule(epoch)
        else:
            self._state = PollingState.PAUSED

    def _schedule(self, epoch: int) -> None:
        self._cancel_timer()
        self._timer = asyncio.create_task(self._tick(epoch))

    async def _tick(self, epoch: int) -> None:
        await asyncio.sleep(self._interval)
        if epoch != self._epoch or not self._auto_refresh:
            return
        if self._timer is asyncio.current_task():
            # Detach: a market switch from here on discards the result instead of cancelling
            self._timer = None
        await self._refresh(epoch)

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            if self._timer is not asyncio.current_task():
                self._timer.cancel()
        self._timer = None
