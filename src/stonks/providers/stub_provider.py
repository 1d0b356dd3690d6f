"""Stub market data providers for offline/testing use."""

import random
import time
from decimal import Decimal

from stonks.domain.views import ProviderQuote


# Deterministic fake prices (current, previous close) for common symbols
_STUB_PRICES: dict[str, tuple[Decimal, Decimal]] = {
    "AAPL": (Decimal("185.50"), Decimal("184.25")),
    "MSFT": (Decimal("378.25"), Decimal("376.80")),
    "VOO": (Decimal("485.25"), Decimal("484.10")),
    "VXUS": (Decimal("58.40"), Decimal("58.10")),
    "VOOV": (Decimal("172.30"), Decimal("171.90")),
    "VO": (Decimal("245.60"), Decimal("246.05")),
    "AAAU": (Decimal("23.15"), Decimal("23.02")),
    "GOP": (Decimal("31.80"), Decimal("31.55")),
}

_STUB_RATES: dict[str, Decimal] = {
    "SGD": Decimal("1.34"),
    "AUD": Decimal("1.51"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
}


class StubQuoteProvider:
    """
    Stub quote provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random
    prices for unknown symbols.
    """

    def __init__(self, seed: int = 42):
        self._rng = random.Random(seed)

    def fetch_quote(self, symbol: str) -> ProviderQuote:
        upper_symbol = symbol.upper()
        if upper_symbol in _STUB_PRICES:
            current, previous_close = _STUB_PRICES[upper_symbol]
        else:
            current = Decimal(str(50 + self._rng.random() * 200)).quantize(Decimal("0.01"))
            change_pct = Decimal(str((self._rng.random() - 0.5) * 0.04))
            previous_close = (current / (1 + change_pct)).quantize(Decimal("0.01"))

        return ProviderQuote(
            current=current,
            high=max(current, previous_close),
            low=min(current, previous_close),
            open=previous_close,
            previous_close=previous_close,
            timestamp=int(time.time()),
        )


class StubFxProvider:
    """Stub FX provider returning fixed USD-based rates."""

    def __init__(self, base_currency: str = "USD"):
        self.base_currency = base_currency

    def fetch_rates(self, currencies: list[str]) -> dict[str, Decimal]:
        return {c: _STUB_RATES[c] for c in currencies if c in _STUB_RATES}
