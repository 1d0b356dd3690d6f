"""Pydantic schemas for API request/response models."""

from stonks.api.schemas.portfolio import (
    PositionResponse,
    ChartEntryResponse,
    ClosedPositionResponse,
    ClosedPositionTotalsResponse,
    ClosedPositionsResponse,
)
from stonks.api.schemas.market import (
    QuoteResponse,
    QuoteResultResponse,
    CacheStatsResponse,
    FxRatesResponse,
    HoldingValuationResponse,
    RebalanceRecommendationResponse,
    RebalancePlanResponse,
    ValuationResponse,
)
from stonks.api.schemas.config import ConfigActionRequest, ConfigActionResponse

__all__ = [
    "PositionResponse",
    "ChartEntryResponse",
    "ClosedPositionResponse",
    "ClosedPositionTotalsResponse",
    "ClosedPositionsResponse",
    "QuoteResponse",
    "QuoteResultResponse",
    "CacheStatsResponse",
    "FxRatesResponse",
    "HoldingValuationResponse",
    "RebalanceRecommendationResponse",
    "RebalancePlanResponse",
    "ValuationResponse",
    "ConfigActionRequest",
    "ConfigActionResponse",
]
