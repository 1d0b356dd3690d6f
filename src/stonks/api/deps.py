"""Dependency injection for FastAPI."""

import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from stonks.cache import InMemoryCacheStore
from stonks.config.settings import get_settings
from stonks.providers import (
    FinnhubQuoteProvider,
    FxProvider,
    OpenExchangeRatesProvider,
    QuoteProvider,
    StubFxProvider,
    StubQuoteProvider,
)
from stonks.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemySettingsRepository,
    SqlAlchemyTransactionRepository,
)
from stonks.repositories.sqlalchemy.database import get_db
from stonks.services import (
    ClosedPositionAnalyzer,
    ConfigActionService,
    FxService,
    LedgerService,
    PositionService,
    QuoteService,
    ValuationService,
)

logger = logging.getLogger(__name__)

# Market data caches live for the whole process and are shared by every request
_quote_service: Optional[QuoteService] = None
_fx_service: Optional[FxService] = None


def get_holding_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingRepository:
    """Provide HoldingRepository instance."""
    return SqlAlchemyHoldingRepository(db)


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_settings_repo(db: Session = Depends(get_db)) -> SqlAlchemySettingsRepository:
    """Provide SettingsRepository instance."""
    return SqlAlchemySettingsRepository(db)


def build_quote_provider() -> QuoteProvider:
    """Finnhub when an API key is configured, otherwise the offline stub."""
    settings = get_settings()
    if settings.finnhub_api_key:
        return FinnhubQuoteProvider(
            api_key=settings.finnhub_api_key,
            base_url=settings.finnhub_base_url,
            timeout=settings.http_timeout_seconds,
        )
    logger.info("No Finnhub API key configured, using stub quotes")
    return StubQuoteProvider()


def build_fx_provider() -> FxProvider:
    """OpenExchangeRates when an app id is configured, otherwise the offline stub."""
    settings = get_settings()
    if settings.openexchangerates_app_id:
        return OpenExchangeRatesProvider(
            app_id=settings.openexchangerates_app_id,
            base_currency=settings.fx_base_currency,
            base_url=settings.openexchangerates_base_url,
            timeout=settings.http_timeout_seconds,
        )
    logger.info("No OpenExchangeRates app id configured, using stub FX rates")
    return StubFxProvider(base_currency=settings.fx_base_currency)


def get_quote_service() -> QuoteService:
    """Provide the process-wide QuoteService."""
    global _quote_service
    if _quote_service is None:
        settings = get_settings()
        _quote_service = QuoteService(
            provider=build_quote_provider(),
            cache=InMemoryCacheStore(),
            ttl_ms=settings.quote_cache_ttl_ms,
            max_workers=settings.quote_fetch_workers,
        )
    return _quote_service


def get_fx_service() -> FxService:
    """Provide the process-wide FxService."""
    global _fx_service
    if _fx_service is None:
        settings = get_settings()
        _fx_service = FxService(
            provider=build_fx_provider(),
            cache=InMemoryCacheStore(),
            ttl_seconds=settings.fx_cache_ttl_seconds,
            base_currency=settings.fx_base_currency,
            default_currencies=settings.fx_currencies,
        )
    return _fx_service


def reset_market_services() -> None:
    """Drop the process-wide market services (and their caches)."""
    global _quote_service, _fx_service
    _quote_service = None
    _fx_service = None


def get_ledger_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    settings_repo: SqlAlchemySettingsRepository = Depends(get_settings_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        holding_repo=holding_repo,
        transaction_repo=transaction_repo,
        settings_repo=settings_repo,
    )


def get_position_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    ledger: LedgerService = Depends(get_ledger_service),
) -> PositionService:
    """Provide PositionService instance."""
    return PositionService(
        holding_repo=holding_repo,
        transaction_repo=transaction_repo,
        ledger=ledger,
        virtual_portfolio_exchange=get_settings().virtual_portfolio_exchange,
    )


def get_closed_position_analyzer(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> ClosedPositionAnalyzer:
    """Provide ClosedPositionAnalyzer instance."""
    return ClosedPositionAnalyzer(holding_repo=holding_repo, transaction_repo=transaction_repo)


def get_valuation_service(
    positions: PositionService = Depends(get_position_service),
    closed_positions: ClosedPositionAnalyzer = Depends(get_closed_position_analyzer),
    quotes: QuoteService = Depends(get_quote_service),
    fx: FxService = Depends(get_fx_service),
    ledger: LedgerService = Depends(get_ledger_service),
) -> ValuationService:
    """Provide ValuationService instance."""
    return ValuationService(
        positions=positions,
        closed_positions=closed_positions,
        quotes=quotes,
        fx=fx,
        ledger=ledger,
    )


def get_config_action_service(
    ledger: LedgerService = Depends(get_ledger_service),
) -> ConfigActionService:
    """Provide ConfigActionService instance."""
    return ConfigActionService(ledger=ledger)
