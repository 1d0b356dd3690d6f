"""
Unit tests for Rebalancer.

Tests cover:
- BUY/SELL/HOLD decisions with whole-share rounding
- Zero-quantity targeted holdings
- Value conservation between holdings and cash
- All-zero targets, overrides and skipped quotes
"""

from decimal import Decimal

import pytest

from stonks.domain.models import RebalanceAction
from stonks.services import Rebalancer

from tests.conftest import make_failed_quote, make_portfolio_quote


def _total(holdings, cash):
    return sum((h.market_value for h in holdings if h.ok), Decimal("0")) + cash


class TestRebalance:
    """Tests for the rebalance plan."""

    def test_zero_quantity_target_gets_buy(self, rebalancer: Rebalancer):
        """
        GIVEN a holding with quantity 0 and target weight 20
        WHEN a plan is built
        THEN it is recommended as a BUY with a positive target quantity
        """
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("10"), Decimal("100"), target_weight=Decimal("80")),
            make_portfolio_quote("BATS:VXUS", Decimal("0"), Decimal("50"), target_weight=Decimal("20")),
        ]
        cash = Decimal("500")

        plan = rebalancer.rebalance(holdings, cash, _total(holdings, cash))
        voo, vxus = plan.recommendations

        assert vxus.action == RebalanceAction.BUY
        assert vxus.target_quantity == Decimal("6")
        assert vxus.value_change == Decimal("300")
        assert voo.action == RebalanceAction.BUY
        assert voo.target_quantity == Decimal("12")
        assert plan.resulting_cash == Decimal("0")
        assert plan.cash_change == Decimal("-500")

    def test_overweight_holding_is_sold(self, rebalancer: Rebalancer):
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("20"), Decimal("100"), target_weight=Decimal("50")),
        ]
        cash = Decimal("0")

        [rec] = rebalancer.rebalance(holdings, cash, _total(holdings, cash)).recommendations

        assert rec.action == RebalanceAction.SELL
        assert rec.target_quantity == Decimal("10")
        assert rec.quantity_change == Decimal("-10")
        assert rec.new_weight == Decimal("50")

    def test_on_target_holding_holds(self, rebalancer: Rebalancer):
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("5"), Decimal("100"), target_weight=Decimal("50")),
        ]

        [rec] = rebalancer.rebalance(holdings, Decimal("500"), Decimal("1000")).recommendations

        assert rec.action == RebalanceAction.HOLD
        assert rec.value_change == Decimal("0")

    @pytest.mark.parametrize(
        "price, expected",
        [
            (Decimal("40"), Decimal("13")),  # 12.5 rounds half up
            (Decimal("30"), Decimal("17")),  # 16.67
            (Decimal("300"), Decimal("2")),  # 1.67
        ],
    )
    def test_target_quantity_rounds_half_up(self, rebalancer: Rebalancer, price, expected):
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("0"), price, target_weight=Decimal("50")),
        ]

        [rec] = rebalancer.rebalance(holdings, Decimal("1000"), Decimal("1000")).recommendations

        assert rec.target_quantity == expected

    def test_conservation(self, rebalancer: Rebalancer):
        """
        GIVEN three priced holdings with awkward prices and cash
        WHEN a plan is built
        THEN target holding value plus resulting cash equals the portfolio total
        """
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("7"), Decimal("412.37"), target_weight=Decimal("55")),
            make_portfolio_quote("BATS:VXUS", Decimal("13"), Decimal("58.91"), target_weight=Decimal("30")),
            make_portfolio_quote("BATS:AAAU", Decimal("0"), Decimal("23.15"), target_weight=Decimal("10")),
        ]
        cash = Decimal("1234.56")
        total = _total(holdings, cash)

        plan = rebalancer.rebalance(holdings, cash, total)
        invested = sum(r.target_quantity * r.current_price for r in plan.recommendations)

        assert invested + plan.resulting_cash == total
        assert plan.new_total_market_value == invested

    def test_untargeted_holding_is_sold_off(self, rebalancer: Rebalancer):
        """
        GIVEN one targeted holding and one without any target
        WHEN a plan is built
        THEN the untargeted holding is treated as a 0% target and sold
        """
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("5"), Decimal("100"), target_weight=Decimal("100")),
            make_portfolio_quote("BATS:VXUS", Decimal("4"), Decimal("50")),
        ]

        plan = rebalancer.rebalance(holdings, Decimal("0"), Decimal("700"))
        vxus = plan.recommendations[1]

        assert vxus.target_weight == Decimal("0")
        assert vxus.action == RebalanceAction.SELL
        assert vxus.target_quantity == Decimal("0")

    def test_all_zero_targets_hold_everything(self, rebalancer: Rebalancer):
        """
        GIVEN holdings without any target weight
        WHEN a plan is built
        THEN every recommendation is HOLD and cash is unchanged
        """
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("5"), Decimal("100")),
            make_portfolio_quote("BATS:VXUS", Decimal("4"), Decimal("50")),
        ]

        plan = rebalancer.rebalance(holdings, Decimal("300"), Decimal("1000"))

        assert [r.action for r in plan.recommendations] == [RebalanceAction.HOLD] * 2
        assert [r.target_quantity for r in plan.recommendations] == [Decimal("5"), Decimal("4")]
        assert plan.resulting_cash == Decimal("300")
        assert plan.cash_change == Decimal("0")

    def test_failed_quotes_are_skipped(self, rebalancer: Rebalancer):
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("5"), Decimal("100"), target_weight=Decimal("50")),
            make_failed_quote("BATS:NOPE", Decimal("3")),
        ]

        plan = rebalancer.rebalance(holdings, Decimal("500"), Decimal("1000"))

        assert [r.code for r in plan.recommendations] == ["BATS:VOO"]

    def test_target_overrides(self, rebalancer: Rebalancer):
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("5"), Decimal("100"), target_weight=Decimal("50")),
        ]

        [rec] = rebalancer.rebalance(
            holdings, Decimal("500"), Decimal("1000"), targets={"BATS:VOO": Decimal("100")}
        ).recommendations

        assert rec.target_weight == Decimal("100")
        assert rec.target_quantity == Decimal("10")

    def test_new_total_weight_deviation(self, rebalancer: Rebalancer):
        """
        GIVEN a target that cannot be hit with whole shares
        WHEN a plan is built
        THEN the remaining deviation is reported
        """
        holdings = [
            make_portfolio_quote("BATS:VOO", Decimal("0"), Decimal("300"), target_weight=Decimal("50")),
        ]

        plan = rebalancer.rebalance(holdings, Decimal("1000"), Decimal("1000"))

        # 2 shares of 300 = 60% against a 50% target
        assert plan.new_total_weight_deviation == Decimal("10")

    def test_empty_holdings(self, rebalancer: Rebalancer):
        plan = rebalancer.rebalance([], Decimal("100"), Decimal("100"))

        assert plan.recommendations == []
        assert plan.resulting_cash == Decimal("100")
