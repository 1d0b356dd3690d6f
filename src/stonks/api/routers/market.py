"""Market data API: quotes, quote cache stats and FX rates."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from stonks.api.deps import get_fx_service, get_quote_service
from stonks.api.schemas import CacheStatsResponse, FxRatesResponse, QuoteResultResponse
from stonks.services import FxService, QuoteService

router = APIRouter(tags=["market"])


def _split(values: Optional[str]) -> list[str]:
    return [v.strip() for v in (values or "").split(",") if v.strip()]


@router.get("/quotes", response_model=list[QuoteResultResponse])
def get_quotes(
    symbols: str = Query(..., description="Comma-separated codes, e.g. BATS:VOO,AAPL"),
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteResultResponse]:
    """Batch quote lookup; a failing symbol carries an error instead of a quote."""
    return [QuoteResultResponse.model_validate(r) for r in service.get_many(_split(symbols))]


@router.get("/quotes/cache", response_model=CacheStatsResponse)
def get_quote_cache_stats(
    service: QuoteService = Depends(get_quote_service),
) -> CacheStatsResponse:
    return CacheStatsResponse.model_validate(service.cache_stats())


@router.get("/fx/rates", response_model=FxRatesResponse)
def get_fx_rates(
    currencies: Optional[str] = Query(None, description="Comma-separated, default SGD,AUD"),
    service: FxService = Depends(get_fx_service),
) -> FxRatesResponse:
    """Latest rates per one base unit. Falls back to cached or fixed rates."""
    wanted = _split(currencies) or None
    return FxRatesResponse(base=service.base_currency, rates=service.get_latest_rates(wanted))
