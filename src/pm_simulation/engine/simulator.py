"""Trade simulation against the crossed ask side.

INSTANT spends a dollar budget walking asks from the lowest price up. Any
budget left after the visible book is filled at a synthetic slippage price:

    impact   = min(0.5, remaining / 5000)
    slippage = min(0.999, base + (1 - base) * (0.1 + impact))

base is the last ask walked, or the limit-price input when the book is empty.
LIMIT fills the requested quantity at the limit price with no taker fee.
"""

import logging
from collections.abc import Sequence

from src.pm_book.domain.models import PriceLevel
from src.pm_common.enums import TradeMode
from src.pm_common.errors import InvalidSimulationInputError
from src.pm_simulation.domain.fee import calc_potential_profit, calc_roi_percent, calc_taker_fee
from src.pm_simulation.domain.models import TradeSimulationInput, TradeSimulationResult

logger = logging.getLogger(__name__)

SLIPPAGE_BASELINE_IMPACT = 0.1
SLIPPAGE_CASH_NORMALIZER = 5000.0
SLIPPAGE_MAX_IMPACT = 0.5
SLIPPAGE_PRICE_CAP = 0.999
EMPTY_BOOK_BASE_PRICE = 0.5  # used when the book is empty and no limit price was given

_CASH_EPSILON = 1e-9


def slippage_price(base_price: float, remaining_cash: float) -> float:
    impact = min(SLIPPAGE_MAX_IMPACT, remaining_cash / SLIPPAGE_CASH_NORMALIZER)
    return min(
        SLIPPAGE_PRICE_CAP,
        base_price + (1 - base_price) * (SLIPPAGE_BASELINE_IMPACT + impact),
    )


def simulate(
    asks: Sequence[PriceLevel], sim_input: TradeSimulationInput
) -> TradeSimulationResult:
    if sim_input.amount_or_qty < 0:
        raise InvalidSimulationInputError(f"amount must be >= 0, got {sim_input.amount_or_qty}")
    if sim_input.mode == TradeMode.LIMIT:
        return _simulate_limit(sim_input)
    return _simulate_instant(asks, sim_input)


def _simulate_limit(sim_input: TradeSimulationInput) -> TradeSimulationResult:
    if sim_input.limit_price is None:
        raise InvalidSimulationInputError("limit mode requires limit_price")
    filled_qty = sim_input.amount_or_qty
    avg_price = sim_input.limit_price
    total_cost = filled_qty * avg_price
    fee = 0.0  # maker orders are not charged the taker fee
    profit = calc_potential_profit(filled_qty, total_cost, fee, sim_input.win_fee_rate)
    return TradeSimulationResult(
        filled_qty=filled_qty,
        total_cost=total_cost,
        avg_price=avg_price,
        fee=fee,
        potential_profit=profit,
        roi_percent=calc_roi_percent(profit, total_cost),
    )


def _simulate_instant(
    asks: Sequence[PriceLevel], sim_input: TradeSimulationInput
) -> TradeSimulationResult:
    remaining = sim_input.amount_or_qty
    filled_qty = 0.0
    total_cost = 0.0
    last_price: float | None = None
    consumed = 0

    for lv in sorted(asks, key=lambda a: a.price_ticks):
        if remaining <= _CASH_EPSILON:
            break
        price = lv.price
        if price <= 0 or lv.size <= 0:
            continue
        fill_cash = min(remaining, price * lv.size)
        filled_qty += fill_cash / price
        total_cost += fill_cash
        remaining -= fill_cash
        last_price = price
        consumed += 1

    slip: float | None = None
    if remaining > _CASH_EPSILON:
        if last_price is not None:
            base = last_price
        elif sim_input.limit_price is not None:
            base = sim_input.limit_price
        else:
            base = EMPTY_BOOK_BASE_PRICE
        slip = slippage_price(base, remaining)
        logger.debug(
            "Book exhausted with $%.2f left; filling at slippage price %.4f (base %.3f)",
            remaining, slip, base,
        )
        filled_qty += remaining / slip
        total_cost += remaining

    avg_price = total_cost / filled_qty if filled_qty > 0 else 0.0
    fee = calc_taker_fee(total_cost, sim_input.taker_fee_rate)
    profit = calc_potential_profit(filled_qty, total_cost, fee, sim_input.win_fee_rate)
    return TradeSimulationResult(
        filled_qty=filled_qty,
        total_cost=total_cost,
        avg_price=avg_price,
        fee=fee,
        potential_profit=profit,
        roi_percent=calc_roi_percent(profit, total_cost),
        slippage_price=slip,
        levels_consumed=consumed,
    )


def effective_price(levels: Sequence[PriceLevel], target_size: float) -> float | None:
    """Average price to buy ``target_size`` shares from visible asks, or None if too thin."""
    if target_size <= 0:
        return None
    remaining = target_size
    total_cost = 0.0
    for lv in sorted(levels, key=lambda a: a.price_ticks):
        take = min(remaining, lv.size)
        total_cost += take * lv.price
        remaining -= take
        if remaining <= 0:
            break
    if remaining > 0:
        return None
    return total_cost / target_size
