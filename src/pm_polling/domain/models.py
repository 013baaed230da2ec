"""Polling domain models: immutable snapshot and observable status."""

from dataclasses import dataclass, field
from datetime import datetime

from src.pm_book.domain.models import PriceLevel
from src.pm_common.enums import LiquidityTier, PollingState


@dataclass(frozen=True)
class BookSnapshot:
    """One joined Yes/No fetch. Replaced as a whole, never mutated."""

    question_id: str
    epoch: int
    yes_levels: tuple[PriceLevel, ...]
    no_levels: tuple[PriceLevel, ...]
    tier: LiquidityTier
    fetched_at: datetime

    @property
    def is_empty(self) -> bool:
        return not self.yes_levels and not self.no_levels


@dataclass(frozen=True)
class PollingStatus:
    state: PollingState
    question_id: str | None
    current_tier: LiquidityTier
    last_updated_at: datetime | None
    is_polling: bool
    auto_refresh: bool
    epoch: int
    last_error: str | None = None
    fetch_count: int = field(default=0)
