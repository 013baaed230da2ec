# src/pm_polling/application/schemas.py
from datetime import datetime

from pydantic import BaseModel, field_validator

from src.pm_common.enums import LiquidityTier, PollingState
from src.pm_polling.domain.models import PollingStatus


class SelectMarketRequest(BaseModel):
    question_id: str

    @field_validator("question_id")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question_id must not be blank")
        return v.strip()


class AutoRefreshRequest(BaseModel):
    enabled: bool


class PollingStatusResponse(BaseModel):
    state: PollingState
    question_id: str | None
    current_tier: LiquidityTier
    last_updated_at: datetime | None
    is_polling: bool
    auto_refresh: bool
    epoch: int
    last_error: str | None
    fetch_count: int

    @classmethod
    def from_domain(cls, s: PollingStatus) -> "PollingStatusResponse":
        return cls(
            state=s.state,
            question_id=s.question_id,
            current_tier=s.current_tier,
            last_updated_at=s.last_updated_at,
            is_polling=s.is_polling,
            auto_refresh=s.auto_refresh,
            epoch=s.epoch,
            last_error=s.last_error,
            fetch_count=s.fetch_count,
        )
