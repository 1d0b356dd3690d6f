"""Market data providers module."""

from stonks.providers.base import QuoteProvider, FxProvider
from stonks.providers.finnhub_provider import FinnhubQuoteProvider
from stonks.providers.openexchangerates_provider import OpenExchangeRatesProvider
from stonks.providers.stub_provider import StubQuoteProvider, StubFxProvider

__all__ = [
    "QuoteProvider",
    "FxProvider",
    "FinnhubQuoteProvider",
    "OpenExchangeRatesProvider",
    "StubQuoteProvider",
    "StubFxProvider",
]
