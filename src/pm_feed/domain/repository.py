# src/pm_feed/domain/repository.py
"""Source Protocols for dependency inversion.

Unit tests inject a mock that conforms to these Protocols.
Infrastructure layer provides the real httpx implementation.
"""

from typing import Protocol

from src.pm_book.domain.models import PriceLevel
from src.pm_common.enums import Outcome
from src.pm_market.domain.models import Market


class PriceLevelSourceProtocol(Protocol):
    async def fetch_levels(self, market_id: str, outcome: Outcome) -> list[PriceLevel]:
        """Bids and asks of one outcome token. Raises UpstreamFetchError on transport failure."""
        ...


class QuestionSourceProtocol(Protocol):
    async def fetch_questions(self, limit: int) -> list[Market]: ...
