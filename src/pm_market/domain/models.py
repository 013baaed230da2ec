"""Domain models for pm_market."""

from dataclasses import dataclass, field

from src.pm_book.engine.crossing import size_scale


@dataclass(frozen=True)
class Market:
    question_id: str
    yes_market_id: str
    no_market_id: str
    lot_size: float
    decimal: int
    tick_size: float | None = None
    is_settled: bool = False
    parent_question_id: str | None = None
    question_header: str = ""
    parent_question_header: str = ""
    question_header_expanded: str = ""
    category: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)
    end_time: int | None = None  # unix seconds

    @property
    def size_scale(self) -> float:
        return size_scale(self.lot_size, self.decimal)

    @property
    def is_multi_question(self) -> bool:
        return bool(self.parent_question_id)

    @property
    def group_key(self) -> str:
        """Sub-markets of one parent event share a key."""
        return self.parent_question_id or self.question_id

    @property
    def title(self) -> str:
        return self.parent_question_header or self.question_header or self.question_id
