"""Portfolio API: holdings, chart entries, closed positions and valuation."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from stonks.api.deps import (
    get_closed_position_analyzer,
    get_position_service,
    get_valuation_service,
)
from stonks.api.schemas import (
    ChartEntryResponse,
    ClosedPositionResponse,
    ClosedPositionsResponse,
    ClosedPositionTotalsResponse,
    PositionResponse,
    ValuationResponse,
)
from stonks.services import ClosedPositionAnalyzer, PositionService, ValuationService

router = APIRouter(tags=["portfolio"])


@router.get("/holdings", response_model=list[PositionResponse])
def list_holdings(
    visibility: Literal["all", "visible", "hidden"] = Query("all"),
    service: PositionService = Depends(get_position_service),
) -> list[PositionResponse]:
    """List holdings with ledger-derived quantity and cost basis."""
    if visibility == "visible":
        positions = service.get_visible_holdings()
    elif visibility == "hidden":
        positions = service.get_hidden_holdings()
    else:
        positions = service.get_holdings()
    return [PositionResponse.model_validate(p) for p in positions]


@router.get("/holdings/chart", response_model=list[ChartEntryResponse])
def list_chart_entries(
    service: PositionService = Depends(get_position_service),
) -> list[ChartEntryResponse]:
    """Chart symbols: the virtual portfolio expression first, then each visible holding."""
    return [ChartEntryResponse.model_validate(e) for e in service.get_chart_entries()]


@router.get("/closed-positions", response_model=ClosedPositionsResponse)
def list_closed_positions(
    analyzer: ClosedPositionAnalyzer = Depends(get_closed_position_analyzer),
) -> ClosedPositionsResponse:
    """Fully exited instruments with realized P/L and footer totals."""
    closed = analyzer.get_closed_positions()
    return ClosedPositionsResponse(
        positions=[ClosedPositionResponse.model_validate(c) for c in closed],
        totals=ClosedPositionTotalsResponse.model_validate(analyzer.summarize(closed)),
    )


@router.get("/valuation", response_model=ValuationResponse)
def get_valuation(
    currency: Optional[str] = Query(None, description="Display currency, e.g. SGD"),
    rebalance: bool = Query(False, description="Include targeted holdings and a rebalance plan"),
    service: ValuationService = Depends(get_valuation_service),
) -> ValuationResponse:
    """Portfolio totals, weights, gains and (optionally) a rebalance plan."""
    return ValuationResponse.model_validate(
        service.summarize(display_currency=currency, rebalance=rebalance)
    )
