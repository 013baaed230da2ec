"""BookApplicationService derives the crossed, accumulated book from the
controller's current snapshot. Pure reads; nothing is cached."""

from src.pm_book.application.schemas import BookResponse
from src.pm_book.domain.models import CrossedBook
from src.pm_book.engine.crossing import cross
from src.pm_book.engine.depth import build_depth
from src.pm_common.enums import Outcome
from src.pm_polling.controller import PollingController


class BookApplicationService:
    def crossed_book(self, controller: PollingController, outcome: Outcome) -> CrossedBook:
        snap = controller.snapshot
        market = controller.market
        if snap is None or market is None:
            return CrossedBook(outcome=outcome)
        return cross(snap.yes_levels, snap.no_levels, outcome, scale=market.size_scale)

    def get_book(self, controller: PollingController, outcome: Outcome) -> BookResponse:
        depth = build_depth(self.crossed_book(controller, outcome))
        status = controller.status()
        return BookResponse.from_depth(
            depth,
            question_id=status.question_id,
            state=status.state,
            tier=status.current_tier,
            last_updated_at=status.last_updated_at,
        )
