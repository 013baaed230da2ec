"""Tests for pm_book.engine.crossing — Yes/No book crossing."""

from src.pm_book.domain.models import PriceLevel
from src.pm_book.engine.crossing import cross, size_scale
from src.pm_common.enums import BookSide, Outcome


def _bid(outcome: Outcome, price: int, size: float) -> PriceLevel:
    return PriceLevel(side=BookSide.BID, price_ticks=price, size=size, source_outcome=outcome)


def _ask(outcome: Outcome, price: int, size: float) -> PriceLevel:
    return PriceLevel(side=BookSide.ASK, price_ticks=price, size=size, source_outcome=outcome)


class TestSizeScale:
    def test_lot_and_decimal(self) -> None:
        assert size_scale(1_000_000, 6) == 1.0

    def test_no_decimal(self) -> None:
        assert size_scale(10, 0) == 10.0

    def test_fractional(self) -> None:
        assert size_scale(1, 2) == 0.01


class TestCrossYes:
    def test_native_bids_and_inverted_no_bids(self) -> None:
        yes = [_bid(Outcome.YES, 600, 100)]
        no = [_bid(Outcome.NO, 350, 40)]
        book = cross(yes, no, Outcome.YES)
        assert book.outcome == Outcome.YES
        assert [(b.price_ticks, b.size) for b in book.bids] == [(600, 100)]
        assert [(a.price_ticks, a.size) for a in book.asks] == [(650, 40)]
        assert book.bids[0].side == BookSide.BID
        assert book.asks[0].side == BookSide.ASK
        assert book.asks[0].source_outcome == Outcome.NO

    def test_sort_order(self) -> None:
        yes = [_bid(Outcome.YES, 500, 1), _bid(Outcome.YES, 600, 1), _bid(Outcome.YES, 550, 1)]
        no = [_bid(Outcome.NO, 300, 1), _bid(Outcome.NO, 380, 1), _bid(Outcome.NO, 350, 1)]
        book = cross(yes, no, Outcome.YES)
        assert [b.price_ticks for b in book.bids] == [600, 550, 500]
        assert [a.price_ticks for a in book.asks] == [620, 650, 700]

    def test_asks_on_either_token_are_ignored(self) -> None:
        yes = [_bid(Outcome.YES, 600, 10), _ask(Outcome.YES, 700, 10)]
        no = [_ask(Outcome.NO, 450, 10)]
        book = cross(yes, no, Outcome.YES)
        assert len(book.bids) == 1
        assert book.asks == ()


class TestCrossNo:
    def test_roles_swap(self) -> None:
        yes = [_bid(Outcome.YES, 600, 100)]
        no = [_bid(Outcome.NO, 350, 40)]
        book = cross(yes, no, Outcome.NO)
        assert [(b.price_ticks, b.size) for b in book.bids] == [(350, 40)]
        assert [(a.price_ticks, a.size) for a in book.asks] == [(400, 100)]
        assert book.asks[0].source_outcome == Outcome.YES


class TestEdgeCases:
    def test_empty_inputs(self) -> None:
        book = cross([], [], Outcome.YES)
        assert book.bids == ()
        assert book.asks == ()
        assert book.is_empty

    def test_one_side_empty(self) -> None:
        book = cross([_bid(Outcome.YES, 600, 5)], [], Outcome.YES)
        assert len(book.bids) == 1
        assert book.asks == ()

    def test_zero_size_levels_dropped(self) -> None:
        book = cross([_bid(Outcome.YES, 600, 0)], [_bid(Outcome.NO, 300, 0)], Outcome.YES)
        assert book.is_empty

    def test_out_of_range_inverted_price_is_clamped(self) -> None:
        # 1000 - 1020 = -20 -> 0
        book = cross([], [_bid(Outcome.NO, 1020, 5)], Outcome.YES)
        assert book.asks[0].price_ticks == 0

    def test_scale_applied_to_sizes(self) -> None:
        book = cross(
            [_bid(Outcome.YES, 600, 2_000_000)],
            [_bid(Outcome.NO, 300, 500_000)],
            Outcome.YES,
            scale=size_scale(1, 6),
        )
        assert book.bids[0].size == 2.0
        assert book.asks[0].size == 0.5

    def test_ties_keep_input_order(self) -> None:
        first = _bid(Outcome.YES, 600, 1)
        second = _bid(Outcome.YES, 600, 2)
        book = cross([first, second], [], Outcome.YES)
        assert [b.size for b in book.bids] == [1, 2]

    def test_no_bid_at_or_above_native_ask_is_possible_input(self) -> None:
        # Crossed input is passed through, not repaired
        book = cross([_bid(Outcome.YES, 700, 1)], [_bid(Outcome.NO, 400, 1)], Outcome.YES)
        assert book.bids[0].price_ticks == 700
        assert book.asks[0].price_ticks == 600
