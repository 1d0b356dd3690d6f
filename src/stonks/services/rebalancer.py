"""Rebalancer: whole-share trades that move holdings toward target weights."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from stonks.domain.models import RebalanceAction
from stonks.domain.views import PortfolioQuote, RebalancePlan, RebalanceRecommendation

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    if whole > 0:
        return part / whole * 100
    return ZERO


def _round_shares(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


class Rebalancer:
    """
    Computes rebalance recommendations against a fixed portfolio total.

    The plan conserves value: the target market value of every holding plus
    the resulting cash always equals the total passed in, provided that
    total is cash plus the current value of the holdings passed in.
    """

    def rebalance(
        self,
        holdings: list[PortfolioQuote],
        cash: Decimal,
        portfolio_total: Decimal,
        targets: Optional[dict[str, Decimal]] = None,
    ) -> RebalancePlan:
        """
        Build a plan for ``holdings``.

        Args:
            holdings: Quoted positions; entries with a failed quote are skipped.
            cash: Uninvested cash before rebalancing.
            portfolio_total: Market value of the holdings plus cash.
            targets: Optional code -> target weight overrides. Holdings with
                neither an override nor a stored target are targeted at 0.
        """
        priced = [h for h in holdings if h.ok]
        skipped = len(holdings) - len(priced)
        if skipped:
            logger.info("Rebalance skipped %d holding(s) without a quote", skipped)

        weights = {h.code: self._target_for(h, targets) for h in priced}
        if sum(weights.values(), ZERO) == 0:
            return self._hold_everything(priced, cash, portfolio_total)

        recommendations = [
            self._recommend(h, weights[h.code], portfolio_total) for h in priced
        ]
        return self._plan(recommendations, cash)

    @staticmethod
    def _target_for(holding: PortfolioQuote, targets: Optional[dict[str, Decimal]]) -> Decimal:
        if targets and holding.code in targets:
            return targets[holding.code]
        return holding.target_weight if holding.target_weight is not None else ZERO

    def _recommend(
        self, holding: PortfolioQuote, target_weight: Decimal, total: Decimal
    ) -> RebalanceRecommendation:
        price = holding.quote.current
        current_quantity = holding.quantity
        current_value = current_quantity * price

        if price > 0:
            ideal_value = total * target_weight / 100
            target_quantity = _round_shares(ideal_value / price)
        else:
            # Unpriced instrument: nothing can be traded
            target_quantity = current_quantity
        target_value = target_quantity * price
        quantity_change = target_quantity - current_quantity

        if quantity_change > 0:
            action = RebalanceAction.BUY
        elif quantity_change < 0:
            action = RebalanceAction.SELL
        else:
            action = RebalanceAction.HOLD

        return RebalanceRecommendation(
            code=holding.code,
            name=holding.name,
            current_price=price,
            current_quantity=current_quantity,
            current_value=current_value,
            current_weight=_percent(current_value, total),
            target_weight=target_weight,
            target_quantity=target_quantity,
            target_value=target_value,
            quantity_change=quantity_change,
            value_change=target_value - current_value,
            new_weight=_percent(target_value, total),
            action=action,
        )

    def _hold_everything(
        self, holdings: list[PortfolioQuote], cash: Decimal, total: Decimal
    ) -> RebalancePlan:
        recommendations = []
        for h in holdings:
            value = h.quantity * h.quote.current
            weight = _percent(value, total)
            recommendations.append(
                RebalanceRecommendation(
                    code=h.code,
                    name=h.name,
                    current_price=h.quote.current,
                    current_quantity=h.quantity,
                    current_value=value,
                    current_weight=weight,
                    target_weight=ZERO,
                    target_quantity=h.quantity,
                    target_value=value,
                    quantity_change=ZERO,
                    value_change=ZERO,
                    new_weight=weight,
                    action=RebalanceAction.HOLD,
                )
            )
        return self._plan(recommendations, cash, targeted=False)

    @staticmethod
    def _plan(
        recommendations: list[RebalanceRecommendation], cash: Decimal, targeted: bool = True
    ) -> RebalancePlan:
        cash_needed = sum((r.value_change for r in recommendations), ZERO)
        deviation = ZERO
        if targeted:
            deviation = sum((abs(r.new_weight - r.target_weight) for r in recommendations), ZERO)
        return RebalancePlan(
            recommendations=recommendations,
            starting_cash=cash,
            resulting_cash=cash - cash_needed,
            cash_change=-cash_needed,
            new_total_market_value=sum((r.target_value for r in recommendations), ZERO),
            new_total_weight_deviation=deviation,
        )
