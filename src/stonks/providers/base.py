"""Market data provider protocols."""

from decimal import Decimal
from typing import Protocol

from stonks.domain.views import ProviderQuote


class QuoteProvider(Protocol):
    """
    Realtime quote lookup, one symbol per request.

    Implementations raise ExternalFetchError on any failure; they never
    return a synthetic quote.
    """

    def fetch_quote(self, symbol: str) -> ProviderQuote:
        """Fetch the quote for a bare (exchange-stripped) symbol."""
        ...


class FxProvider(Protocol):
    """Exchange-rate lookup relative to one fixed base currency."""

    base_currency: str

    def fetch_rates(self, currencies: list[str]) -> dict[str, Decimal]:
        """Return currency -> rate (units of currency per one base unit)."""
        ...
