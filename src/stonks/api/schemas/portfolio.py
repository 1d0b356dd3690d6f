"""Pydantic schemas for holdings, closed positions and chart entries."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class PositionResponse(BaseModel):
    """A holding with its ledger-derived quantity and cost basis."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int]
    name: str
    code: str
    quantity: float
    cost_basis: Optional[float] = None
    target_weight: Optional[float] = None
    visible: bool


class ChartEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    symbol: str
    is_virtual: bool = False


class ClosedPositionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    total_cost: float
    total_revenue: float
    profit_loss: float
    profit_loss_percent: float
    transaction_count: int


class ClosedPositionTotalsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_cost: float
    total_revenue: float
    profit_loss: float
    profit_loss_percent: float
    count: int


class ClosedPositionsResponse(BaseModel):
    """Closed positions with their footer totals."""

    positions: list[ClosedPositionResponse]
    totals: ClosedPositionTotalsResponse
