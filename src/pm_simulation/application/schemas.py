# src/pm_simulation/application/schemas.py
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from src.pm_common.enums import Outcome, TradeMode
from src.pm_simulation.domain.models import TradeSimulationResult


class SimulateRequest(BaseModel):
    outcome: Literal["YES", "NO"]
    mode: Literal["INSTANT", "LIMIT"] = "INSTANT"
    amount: float = Field(ge=0, description="INSTANT: dollars to spend. LIMIT: share quantity.")
    limit_price: float | None = Field(None, ge=0, le=1)

    @model_validator(mode="after")
    def limit_needs_price(self) -> "SimulateRequest":
        if self.mode == "LIMIT" and self.limit_price is None:
            raise ValueError("limit_price is required in LIMIT mode")
        return self

    @property
    def outcome_enum(self) -> Outcome:
        return Outcome(self.outcome)

    @property
    def mode_enum(self) -> TradeMode:
        return TradeMode(self.mode)


class SimulationResponse(BaseModel):
    question_id: str | None
    outcome: Outcome
    mode: TradeMode
    filled_qty: float
    total_cost: float
    avg_price: float
    fee: float
    potential_profit: float
    roi_percent: float
    slippage_price: float | None
    levels_consumed: int
    book_levels: int
    book_effective_price: float | None = None  # visible-depth price for filled_qty

    @classmethod
    def from_domain(
        cls,
        result: TradeSimulationResult,
        question_id: str | None,
        outcome: Outcome,
        mode: TradeMode,
        book_levels: int,
        book_effective_price: float | None = None,
    ) -> "SimulationResponse":
        return cls(
            question_id=question_id,
            outcome=outcome,
            mode=mode,
            filled_qty=round(result.filled_qty, 6),
            total_cost=round(result.total_cost, 6),
            avg_price=round(result.avg_price, 6),
            fee=round(result.fee, 6),
            potential_profit=round(result.potential_profit, 6),
            roi_percent=round(result.roi_percent, 4),
            slippage_price=result.slippage_price,
            levels_consumed=result.levels_consumed,
            book_levels=book_levels,
            book_effective_price=(
                round(book_effective_price, 6) if book_effective_price is not None else None
            ),
        )
