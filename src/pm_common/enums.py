"""Global enums. Values are the wire representation used by the API."""

from enum import Enum


class Outcome(str, Enum):
    YES = "YES"
    NO = "NO"

    @property
    def complement(self) -> "Outcome":
        return Outcome.NO if self is Outcome.YES else Outcome.YES


class BookSide(str, Enum):
    BID = "BID"
    ASK = "ASK"


class TradeMode(str, Enum):
    """INSTANT spends a dollar budget against the asks; LIMIT buys a fixed qty at a fixed price."""

    INSTANT = "INSTANT"
    LIMIT = "LIMIT"


class LiquidityTier(str, Enum):
    NONE = "NONE"
    LOW = "LOW"
    MED = "MED"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {
    LiquidityTier.NONE: 0,
    LiquidityTier.LOW: 1,
    LiquidityTier.MED: 2,
    LiquidityTier.HIGH: 3,
}


class PollingState(str, Enum):
    IDLE = "IDLE"
    FETCHING = "FETCHING"
    POLLING = "POLLING"
    PAUSED = "PAUSED"
