"""Valuation: portfolio totals, weights, deviations and gains."""

import logging
from decimal import Decimal
from typing import Optional

from stonks.domain.views import (
    ClosedPosition,
    HoldingValuation,
    PortfolioQuote,
    PortfolioValuation,
)
from stonks.services.closed_positions import ClosedPositionAnalyzer
from stonks.services.fx_service import FxService
from stonks.services.ledger_service import LedgerService
from stonks.services.position_service import PositionService
from stonks.services.quote_service import QuoteService
from stonks.services.rebalancer import Rebalancer

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    if whole > 0:
        return part / whole * 100
    return ZERO


def aggregate(
    portfolio_quotes: list[PortfolioQuote],
    cash: Decimal,
    closed_positions: list[ClosedPosition],
    fx_rate: Decimal = Decimal("1"),
    display_currency: str = "USD",
) -> PortfolioValuation:
    """
    Combine quoted holdings, cash and realized results into one valuation.

    Holdings whose quote failed keep their error and are left out of every
    sum and weight. Amounts are in the base currency except the two
    ``*_display`` figures, which are multiplied by ``fx_rate``.
    """
    lines: list[HoldingValuation] = []
    total_market_value = ZERO
    total_cost_basis = ZERO
    day_change_value = ZERO
    previous_value = ZERO

    for pq in portfolio_quotes:
        if not pq.ok:
            lines.append(
                HoldingValuation(
                    code=pq.code,
                    name=pq.name,
                    quantity=pq.quantity,
                    target_weight=pq.target_weight,
                    error=pq.error,
                )
            )
            continue

        day_change = pq.quote.change_abs * pq.quantity
        total_market_value += pq.market_value
        total_cost_basis += pq.cost_basis
        day_change_value += day_change
        previous_value += pq.quote.previous_close * pq.quantity
        lines.append(
            HoldingValuation(
                code=pq.code,
                name=pq.name,
                quantity=pq.quantity,
                current_price=pq.quote.current,
                market_value=pq.market_value,
                cost_basis=pq.cost_basis,
                gain=pq.gain,
                gain_percent=pq.gain_percent,
                day_change_value=day_change,
                target_weight=pq.target_weight,
            )
        )

    portfolio_total = total_market_value + cash

    total_weight_deviation = ZERO
    for line in lines:
        if line.error:
            continue
        line.weight = _percent(line.market_value, portfolio_total)
        if line.target_weight is not None:
            line.weight_deviation = line.weight - line.target_weight
            total_weight_deviation += abs(line.weight_deviation)

    open_gain = total_market_value - total_cost_basis
    realized_gain = sum((c.profit_loss for c in closed_positions), ZERO)
    total_gain = open_gain + realized_gain
    gain_base = total_cost_basis + abs(realized_gain)

    return PortfolioValuation(
        holdings=lines,
        cash=cash,
        cash_weight=_percent(cash, portfolio_total),
        total_market_value=total_market_value,
        total_cost_basis=total_cost_basis,
        portfolio_total=portfolio_total,
        total_weight_deviation=total_weight_deviation,
        day_change_value=day_change_value,
        day_change_percent=_percent(day_change_value, previous_value),
        open_gain=open_gain,
        realized_gain=realized_gain,
        total_gain=total_gain,
        total_gain_percent=_percent(total_gain, gain_base),
        display_currency=display_currency,
        fx_rate=fx_rate,
        portfolio_total_display=portfolio_total * fx_rate,
        total_gain_display=total_gain * fx_rate,
    )


class ValuationService:
    """Wires ledger, quotes and FX into a portfolio valuation."""

    def __init__(
        self,
        positions: PositionService,
        closed_positions: ClosedPositionAnalyzer,
        quotes: QuoteService,
        fx: FxService,
        ledger: LedgerService,
        rebalancer: Optional[Rebalancer] = None,
    ):
        self._positions = positions
        self._closed_positions = closed_positions
        self._quotes = quotes
        self._fx = fx
        self._ledger = ledger
        self._rebalancer = rebalancer or Rebalancer()

    def summarize(
        self, display_currency: Optional[str] = None, rebalance: bool = False
    ) -> PortfolioValuation:
        """
        Value the visible active holdings.

        With ``rebalance`` set, holdings that only have a target weight are
        included too and a rebalance plan is attached.
        """
        positions = self._positions.get_active_holdings(include_targeted=rebalance)
        portfolio_quotes = self._quotes.get_portfolio_quotes(positions)
        closed = self._closed_positions.get_closed_positions()
        cash = self._ledger.get_cash_amount()
        currency, rate = self._resolve_fx(display_currency)

        valuation = aggregate(
            portfolio_quotes,
            cash,
            closed,
            fx_rate=rate,
            display_currency=currency,
        )
        valuation.last_updated = self._quotes.oldest_cache_timestamp()

        if rebalance:
            valuation.rebalance = self._rebalancer.rebalance(
                portfolio_quotes, cash, valuation.portfolio_total
            )
        return valuation

    def _resolve_fx(self, display_currency: Optional[str]) -> tuple[str, Decimal]:
        base = self._fx.base_currency
        currency = (display_currency or base).strip().upper()
        rate = self._fx.rate_for(currency)
        if rate is None:
            logger.warning("No FX rate for %s, reporting in %s", currency, base)
            return base, Decimal("1")
        return currency, rate
