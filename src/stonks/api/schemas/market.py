"""Pydantic schemas for quotes, FX rates and valuation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from stonks.domain.models import RebalanceAction


class QuoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    current: float
    high: float
    low: float
    open: float
    previous_close: float
    change_abs: float
    change_pct: float
    timestamp: int


class QuoteResultResponse(BaseModel):
    """One symbol of a batch lookup: either a quote or an error."""

    model_config = ConfigDict(from_attributes=True)

    symbol: str
    quote: Optional[QuoteResponse] = None
    error: Optional[str] = None


class CacheStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    size: int
    symbols: list[str]
    ttl_ms: int
    oldest_timestamp: Optional[float] = None
    newest_timestamp: Optional[float] = None


class FxRatesResponse(BaseModel):
    base: str
    rates: dict[str, float]


class HoldingValuationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    quantity: float
    current_price: Optional[float] = None
    market_value: float
    cost_basis: float
    gain: float
    gain_percent: float
    day_change_value: float
    weight: float
    target_weight: Optional[float] = None
    weight_deviation: Optional[float] = None
    error: Optional[str] = None


class RebalanceRecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    current_price: float
    current_quantity: float
    current_value: float
    current_weight: float
    target_weight: float
    target_quantity: float
    target_value: float
    quantity_change: float
    value_change: float
    new_weight: float
    action: RebalanceAction


class RebalancePlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    recommendations: list[RebalanceRecommendationResponse]
    starting_cash: float
    resulting_cash: float
    cash_change: float
    new_total_market_value: float
    new_total_weight_deviation: float


class ValuationResponse(BaseModel):
    """Portfolio valuation; amounts in the base currency unless suffixed ``_display``."""

    model_config = ConfigDict(from_attributes=True)

    holdings: list[HoldingValuationResponse]
    cash: float
    cash_weight: float
    total_market_value: float
    total_cost_basis: float
    portfolio_total: float
    total_weight_deviation: float
    day_change_value: float
    day_change_percent: float
    open_gain: float
    realized_gain: float
    total_gain: float
    total_gain_percent: float
    display_currency: str
    fx_rate: float
    portfolio_total_display: float
    total_gain_display: float
    last_updated: Optional[float] = None
    rebalance: Optional[RebalancePlanResponse] = None
