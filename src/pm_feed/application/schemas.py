"""Pydantic schemas for upstream payloads (the ingestion boundary).

Upstream sends loosely typed JSON (numbers as strings, nulls, missing keys).
Everything is validated and defaulted here; the core only sees PriceLevel and
Market.

Question (catalog) payload, camelCase:
  {"questionId": "...", "lotSize": "1000000", "decimal": "6",
   "yesTokenMarketId": "11", "noTokenMarketId": "12",
   "blockchainMetadata": {"questionEndTime": "1760000000", ...}}

Price level payload, snake_case:
  {"market_id": 11, "direction": "bid", "price": 650, "total_size": 1200.0, "version": 7}
"""

import logging
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from src.pm_book.domain.models import PriceLevel
from src.pm_common.enums import BookSide, Outcome
from src.pm_common.ticks import clamp_ticks, is_valid_ticks
from src.pm_market.domain.models import Market

logger = logging.getLogger(__name__)


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


# ---------------------------------------------------------------------------
# Question catalog
# ---------------------------------------------------------------------------


class BlockchainMetadataPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    parent_question_id: str | None = Field(None, alias="parentQuestionId")
    question_header: str = Field("", alias="questionHeader")
    parent_question_header: str = Field("", alias="parentQuestionHeader")
    question_header_expanded: str = Field("", alias="questionHeaderExpanded")
    category: str = ""
    tags: list[str] = Field(default_factory=list)
    question_end_time: int | None = Field(None, alias="questionEndTime")

    @field_validator("parent_question_id", "question_end_time", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator(
        "question_header", "parent_question_header", "question_header_expanded", "category",
        mode="before",
    )
    @classmethod
    def null_text_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class QuestionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    question_id: str = Field(alias="questionId")
    yes_token_market_id: str = Field(alias="yesTokenMarketId")
    no_token_market_id: str = Field(alias="noTokenMarketId")
    lot_size: float = Field(1.0, alias="lotSize")
    decimal: int = 0
    tick_size: float | None = Field(None, alias="tickSize")
    is_settled: bool = Field(False, alias="isSettled")
    blockchain_metadata: BlockchainMetadataPayload = Field(
        default_factory=BlockchainMetadataPayload, alias="blockchainMetadata"
    )

    @field_validator("question_id", "yes_token_market_id", "no_token_market_id", mode="before")
    @classmethod
    def ids_as_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("lot_size", mode="before")
    @classmethod
    def lot_size_default(cls, v: Any) -> Any:
        v = _blank_to_none(v)
        return 1.0 if v is None else v

    @field_validator("decimal", mode="before")
    @classmethod
    def decimal_default(cls, v: Any) -> Any:
        v = _blank_to_none(v)
        return 0 if v is None else v

    @field_validator("tick_size", mode="before")
    @classmethod
    def blank_tick_size(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("blockchain_metadata", mode="before")
    @classmethod
    def null_metadata(cls, v: Any) -> Any:
        return {} if v is None else v

    def to_domain(self) -> Market:
        bm = self.blockchain_metadata
        return Market(
            question_id=self.question_id,
            yes_market_id=self.yes_token_market_id,
            no_market_id=self.no_token_market_id,
            lot_size=self.lot_size,
            decimal=self.decimal,
            tick_size=self.tick_size,
            is_settled=self.is_settled,
            parent_question_id=bm.parent_question_id,
            question_header=bm.question_header,
            parent_question_header=bm.parent_question_header,
            question_header_expanded=bm.question_header_expanded,
            category=bm.category,
            tags=tuple(bm.tags),
            end_time=bm.question_end_time,
        )


class QuestionListPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    questions: list[Any] = Field(default_factory=list)

    @field_validator("questions", mode="before")
    @classmethod
    def null_questions(cls, v: Any) -> Any:
        return [] if v is None else v


# ---------------------------------------------------------------------------
# Price levels
# ---------------------------------------------------------------------------


class PriceLevelPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    market_id: str | None = None
    direction: Literal["bid", "ask"] | None = None
    price: int
    size: float = Field(0.0, validation_alias=AliasChoices("total_size", "size"))
    version: int | None = None

    @field_validator("market_id", mode="before")
    @classmethod
    def market_id_as_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("direction", mode="before")
    @classmethod
    def lower_direction(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("size", mode="before")
    @classmethod
    def null_size(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    def to_domain(self, side: BookSide, outcome: Outcome) -> PriceLevel | None:
        """None for empty levels; out-of-range prices are clamped."""
        if self.size <= 0:
            return None
        price = self.price
        if not is_valid_ticks(price):
            logger.warning("Upstream price %d out of range for market %s, clamped", price, self.market_id)
            price = clamp_ticks(price)
        return PriceLevel(side=side, price_ticks=price, size=self.size, source_outcome=outcome)


def parse_levels(raw: Any, side: BookSide, outcome: Outcome) -> list[PriceLevel]:
    """Validate a raw price_levels response body. Null/absent bodies are an empty side."""
    if not raw:
        return []
    if not isinstance(raw, list):
        logger.warning("Unexpected price_levels body type %s, treating as empty", type(raw).__name__)
        return []
    levels: list[PriceLevel] = []
    for item in raw:
        try:
            payload = PriceLevelPayload.model_validate(item)
        except ValueError as exc:  # pydantic.ValidationError subclasses ValueError
            logger.warning("Skipping malformed price level %r: %s", item, exc)
            continue
        lv = payload.to_domain(side, outcome)
        if lv is not None:
            levels.append(lv)
    return levels


def parse_questions(raw: Any) -> list[Market]:
    """Validate a question catalog body. Malformed entries are skipped with a warning."""
    if not isinstance(raw, dict):
        return []
    body = QuestionListPayload.model_validate(raw)
    markets: list[Market] = []
    for item in body.questions:
        try:
            markets.append(QuestionPayload.model_validate(item).to_domain())
        except ValueError as exc:  # pydantic.ValidationError subclasses ValueError
            qid = item.get("questionId") if isinstance(item, dict) else None
            logger.warning("Skipping malformed question %s: %s", qid, exc)
    return markets
