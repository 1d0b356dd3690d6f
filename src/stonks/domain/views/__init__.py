"""View models for service outputs."""

from stonks.domain.views.portfolio import (
    PositionView,
    WeightedTerm,
    VirtualPortfolio,
    ChartEntry,
    ClosedPosition,
    ClosedPositionTotals,
    format_number,
)
from stonks.domain.views.market import (
    ProviderQuote,
    Quote,
    QuoteResult,
    PortfolioQuote,
    CacheStats,
)
from stonks.domain.views.valuation import (
    HoldingValuation,
    PortfolioValuation,
    RebalanceRecommendation,
    RebalancePlan,
)

__all__ = [
    "PositionView",
    "WeightedTerm",
    "VirtualPortfolio",
    "ChartEntry",
    "ClosedPosition",
    "ClosedPositionTotals",
    "format_number",
    "ProviderQuote",
    "Quote",
    "QuoteResult",
    "PortfolioQuote",
    "CacheStats",
    "HoldingValuation",
    "PortfolioValuation",
    "RebalanceRecommendation",
    "RebalancePlan",
]
