"""
Unit tests for ClosedPositionAnalyzer.

Tests cover:
- Detection of fully exited codes
- Realized P/L and percent
- Name resolution and ordering
- Footer totals
"""

from decimal import Decimal

from stonks.domain.models import TransactionType
from stonks.services import ClosedPositionAnalyzer


class TestGetClosedPositions:
    """Tests for closed position detection."""

    def test_round_trip_with_fees(
        self,
        closed_position_analyzer: ClosedPositionAnalyzer,
        holding_factory,
        transaction_factory,
    ):
        """
        GIVEN BUY 10 for 1000 fee 1 and SELL 10 for 1200 fee 1
        WHEN closed positions are computed
        THEN cost 1001, revenue 1199, P/L 198 and percent 198/1001*100
        """
        holding_factory("BATS:VOO", name="S&P 500")
        transaction_factory("BATS:VOO", TransactionType.BUY, Decimal("10"), Decimal("1000"), Decimal("1"))
        transaction_factory("BATS:VOO", TransactionType.SELL, Decimal("10"), Decimal("1200"), Decimal("1"))

        [closed] = closed_position_analyzer.get_closed_positions()

        assert closed.code == "BATS:VOO"
        assert closed.name == "S&P 500"
        assert closed.total_cost == Decimal("1001")
        assert closed.total_revenue == Decimal("1199")
        assert closed.profit_loss == Decimal("198")
        assert closed.profit_loss_percent == Decimal("198") / Decimal("1001") * 100
        assert closed.transaction_count == 2

    def test_open_positions_are_not_closed(
        self,
        closed_position_analyzer: ClosedPositionAnalyzer,
        transaction_factory,
    ):
        """
        GIVEN a partially sold position
        WHEN closed positions are computed
        THEN it is not reported
        """
        transaction_factory("BATS:VOO", TransactionType.BUY, Decimal("10"), Decimal("1000"))
        transaction_factory("BATS:VOO", TransactionType.SELL, Decimal("4"), Decimal("480"))

        assert closed_position_analyzer.get_closed_positions() == []

    def test_name_falls_back_to_code_and_sorted(
        self,
        closed_position_analyzer: ClosedPositionAnalyzer,
        transaction_factory,
    ):
        """
        GIVEN two closed codes without holding rows
        WHEN closed positions are computed
        THEN each appears once, named by code, sorted by code
        """
        for code in ("BATS:VXUS", "BATS:AAAU"):
            transaction_factory(code, TransactionType.BUY, Decimal("2"), Decimal("100"))
            transaction_factory(code, TransactionType.SELL, Decimal("1"), Decimal("40"))
            transaction_factory(code, TransactionType.SELL, Decimal("1"), Decimal("40"))

        closed = closed_position_analyzer.get_closed_positions()

        assert [c.code for c in closed] == ["BATS:AAAU", "BATS:VXUS"]
        assert [c.name for c in closed] == ["BATS:AAAU", "BATS:VXUS"]
        assert closed[0].profit_loss == Decimal("-20")

    def test_zero_cost_gives_zero_percent(
        self,
        closed_position_analyzer: ClosedPositionAnalyzer,
        transaction_factory,
    ):
        """
        GIVEN a closed position bought for nothing (e.g. a spin-off)
        WHEN closed positions are computed
        THEN profit percent is 0 instead of dividing by zero
        """
        transaction_factory("BATS:GOP", TransactionType.BUY, Decimal("5"), Decimal("0"))
        transaction_factory("BATS:GOP", TransactionType.SELL, Decimal("5"), Decimal("50"))

        [closed] = closed_position_analyzer.get_closed_positions()

        assert closed.profit_loss == Decimal("50")
        assert closed.profit_loss_percent == Decimal("0")


class TestSummarize:
    """Tests for footer totals."""

    def test_totals(
        self,
        closed_position_analyzer: ClosedPositionAnalyzer,
        transaction_factory,
    ):
        """
        GIVEN one winning and one losing closed position
        WHEN totals are summarised
        THEN cost, revenue and P/L are summed and percent is against total cost
        """
        transaction_factory("BATS:VOO", TransactionType.BUY, Decimal("1"), Decimal("100"))
        transaction_factory("BATS:VOO", TransactionType.SELL, Decimal("1"), Decimal("150"))
        transaction_factory("BATS:VXUS", TransactionType.BUY, Decimal("1"), Decimal("100"))
        transaction_factory("BATS:VXUS", TransactionType.SELL, Decimal("1"), Decimal("70"))

        totals = ClosedPositionAnalyzer.summarize(closed_position_analyzer.get_closed_positions())

        assert totals.count == 2
        assert totals.total_cost == Decimal("200")
        assert totals.total_revenue == Decimal("220")
        assert totals.profit_loss == Decimal("20")
        assert totals.profit_loss_percent == Decimal("10")

    def test_empty(self):
        """
        GIVEN no closed positions
        WHEN totals are summarised
        THEN everything is zero
        """
        totals = ClosedPositionAnalyzer.summarize([])

        assert totals.count == 0
        assert totals.profit_loss_percent == Decimal("0")
