"""SimulationApplicationService: simulates against the current crossed asks."""

from config.settings import settings
from src.pm_book.application.service import BookApplicationService
from src.pm_polling.controller import PollingController
from src.pm_simulation.application.schemas import SimulateRequest, SimulationResponse
from src.pm_simulation.domain.models import TradeSimulationInput
from src.pm_simulation.engine.simulator import effective_price, simulate


class SimulationApplicationService:
    def __init__(self, books: BookApplicationService | None = None) -> None:
        self._books = books or BookApplicationService()

    def simulate(
        self, controller: PollingController, req: SimulateRequest
    ) -> SimulationResponse:
        outcome = req.outcome_enum
        book = self._books.crossed_book(controller, outcome)
        sim_input = TradeSimulationInput(
            outcome=outcome,
            mode=req.mode_enum,
            amount_or_qty=req.amount,
            limit_price=req.limit_price,
            taker_fee_rate=settings.TAKER_FEE_RATE,
            win_fee_rate=settings.WIN_FEE_RATE,
        )
        result = simulate(book.asks, sim_input)
        market = controller.market
        return SimulationResponse.from_domain(
            result,
            question_id=market.question_id if market else None,
            outcome=outcome,
            mode=sim_input.mode,
            book_levels=len(book.asks),
            book_effective_price=effective_price(book.asks, result.filled_qty),
        )
