"""Simulation domain models."""

from dataclasses import dataclass

from src.pm_common.enums import Outcome, TradeMode

DEFAULT_TAKER_FEE_RATE = 0.0005
DEFAULT_WIN_FEE_RATE = 0.10


@dataclass(frozen=True)
class TradeSimulationInput:
    outcome: Outcome
    mode: TradeMode
    amount_or_qty: float  # INSTANT: dollar budget; LIMIT: share quantity
    limit_price: float | None = None  # dollars, 0..1
    taker_fee_rate: float = DEFAULT_TAKER_FEE_RATE
    win_fee_rate: float = DEFAULT_WIN_FEE_RATE


@dataclass(frozen=True)
class TradeSimulationResult:
    filled_qty: float
    total_cost: float
    avg_price: float
    fee: float
    potential_profit: float
    roi_percent: float
    slippage_price: float | None = None  # set only when the book ran out
    levels_consumed: int = 0
