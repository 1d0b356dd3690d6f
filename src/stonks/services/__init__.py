"""Application services."""

from stonks.services.ledger_service import LedgerService
from stonks.services.position_service import PositionService, LedgerTally, tally_transactions
from stonks.services.closed_positions import ClosedPositionAnalyzer
from stonks.services.quote_service import QuoteService, normalize_symbol
from stonks.services.fx_service import FxService, FALLBACK_RATES, currency_symbol
from stonks.services.rebalancer import Rebalancer
from stonks.services.valuation_service import ValuationService, aggregate
from stonks.services.config_actions import ActionResult, ConfigActionService

__all__ = [
    "LedgerService",
    "PositionService",
    "LedgerTally",
    "tally_transactions",
    "ClosedPositionAnalyzer",
    "QuoteService",
    "normalize_symbol",
    "FxService",
    "FALLBACK_RATES",
    "currency_symbol",
    "Rebalancer",
    "ValuationService",
    "aggregate",
    "ActionResult",
    "ConfigActionService",
]
