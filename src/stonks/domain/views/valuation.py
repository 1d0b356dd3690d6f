"""View models for valuation and rebalancing outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from stonks.domain.models.enums import RebalanceAction


@dataclass
class HoldingValuation:
    """Per-holding line of a portfolio valuation."""

    code: str
    name: str
    quantity: Decimal
    current_price: Optional[Decimal] = None
    market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    gain: Decimal = field(default_factory=lambda: Decimal("0"))
    gain_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    day_change_value: Decimal = field(default_factory=lambda: Decimal("0"))
    weight: Decimal = field(default_factory=lambda: Decimal("0"))
    target_weight: Optional[Decimal] = None
    weight_deviation: Optional[Decimal] = None
    error: Optional[str] = None


@dataclass
class RebalanceRecommendation:
    """Suggested share-count change for one holding."""

    code: str
    name: str
    current_price: Decimal
    current_quantity: Decimal
    current_value: Decimal
    current_weight: Decimal
    target_weight: Decimal
    target_quantity: Decimal
    target_value: Decimal
    quantity_change: Decimal
    value_change: Decimal
    new_weight: Decimal
    action: RebalanceAction = RebalanceAction.HOLD


@dataclass
class RebalancePlan:
    """All recommendations plus the cash left over after applying them."""

    recommendations: list[RebalanceRecommendation] = field(default_factory=list)
    starting_cash: Decimal = field(default_factory=lambda: Decimal("0"))
    resulting_cash: Decimal = field(default_factory=lambda: Decimal("0"))
    cash_change: Decimal = field(default_factory=lambda: Decimal("0"))
    new_total_market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    new_total_weight_deviation: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class PortfolioValuation:
    """Portfolio totals, weights and deviations."""

    holdings: list[HoldingValuation] = field(default_factory=list)
    cash: Decimal = field(default_factory=lambda: Decimal("0"))
    cash_weight: Decimal = field(default_factory=lambda: Decimal("0"))
    total_market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    portfolio_total: Decimal = field(default_factory=lambda: Decimal("0"))
    total_weight_deviation: Decimal = field(default_factory=lambda: Decimal("0"))
    day_change_value: Decimal = field(default_factory=lambda: Decimal("0"))
    day_change_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    open_gain: Decimal = field(default_factory=lambda: Decimal("0"))
    realized_gain: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    display_currency: str = "USD"
    fx_rate: Decimal = field(default_factory=lambda: Decimal("1"))
    portfolio_total_display: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_display: Decimal = field(default_factory=lambda: Decimal("0"))
    last_updated: Optional[float] = None
    rebalance: Optional[RebalancePlan] = None
