"""
FX service: exchange rates behind a single hourly cache entry.

Resolution order on every call: fresh cache, provider fetch, stale cache,
fixed fallback table. A fresh table missing a requested currency counts as a
miss. Callers always get a rate table back.
"""

import logging
from decimal import Decimal
from typing import Callable, Iterable, Optional

from stonks.cache import CacheStore, InMemoryCacheStore
from stonks.core.exceptions import ExternalFetchError
from stonks.core.timezone import now_millis
from stonks.providers.base import FxProvider

logger = logging.getLogger(__name__)

FX_CACHE_KEY = "latest_rates"
DEFAULT_TTL_SECONDS = 3600
DEFAULT_CURRENCIES = ("SGD", "AUD")

FALLBACK_RATES: dict[str, Decimal] = {
    "SGD": Decimal("1.35"),
    "AUD": Decimal("1.52"),
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "SGD": "S$",
    "AUD": "A$",
}


def filter_rates(rates: dict[str, Decimal], currencies: Iterable[str]) -> dict[str, Decimal]:
    """Restrict a rate table to the requested currencies."""
    return {c: rates[c] for c in currencies if c in rates}


def currency_symbol(currency: str) -> str:
    """Display symbol for a currency code (``$`` when unknown)."""
    return CURRENCY_SYMBOLS.get((currency or "").upper(), "$")


class FxService:
    """Exchange rates relative to ``base_currency``, never raising to callers."""

    def __init__(
        self,
        provider: Optional[FxProvider],
        cache: Optional[CacheStore] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        base_currency: str = "USD",
        default_currencies: Iterable[str] = DEFAULT_CURRENCIES,
        clock: Callable[[], float] = now_millis,
    ):
        self._provider = provider
        self._clock = clock
        self._cache = cache if cache is not None else InMemoryCacheStore(clock=clock)
        self._ttl_ms = ttl_seconds * 1000
        self.base_currency = base_currency.upper()
        self._default_currencies = tuple(c.upper() for c in default_currencies)

    def get_latest_rates(self, currencies: Optional[Iterable[str]] = None) -> dict[str, Decimal]:
        """Rates for ``currencies`` (default SGD and AUD) per one base unit."""
        wanted = self._normalize(currencies)

        cached = self._cache.get(FX_CACHE_KEY)
        known: list[str] = []
        if cached is not None:
            known = list(cached.value)
            if cached.is_fresh(self._clock(), self._ttl_ms):
                if all(c in cached.value for c in wanted):
                    logger.debug("Using cached FX rates")
                    return filter_rates(cached.value, wanted)
                logger.debug("Cached FX rates lack %s, refetching", ", ".join(wanted))

        try:
            rates = self._fetch(list(dict.fromkeys([*self._default_currencies, *known, *wanted])))
        except ExternalFetchError as exc:
            if cached is not None:
                logger.warning("FX fetch failed, serving cached rates: %s", exc.message)
                return filter_rates(cached.value, wanted)
            logger.warning("FX fetch failed, serving fallback rates: %s", exc.message)
            return filter_rates(FALLBACK_RATES, wanted)

        self._cache.set(FX_CACHE_KEY, rates)
        logger.info("FX rates refreshed for %s", ", ".join(sorted(rates)))
        return filter_rates(rates, wanted)

    def rate_for(self, currency: str) -> Optional[Decimal]:
        """Rate for one currency; 1 for the base currency, None when unavailable."""
        code = (currency or "").strip().upper()
        if code == self.base_currency:
            return Decimal("1")
        return self.get_latest_rates([code]).get(code)

    def convert_from_base(
        self, amount: Decimal, currency: str, rates: dict[str, Decimal]
    ) -> Decimal:
        """Convert a base-currency amount; a missing rate leaves it unconverted."""
        code = (currency or "").strip().upper()
        if code == self.base_currency:
            return amount
        rate = rates.get(code)
        if rate is None:
            logger.warning("No FX rate for %s, amount left in %s", code, self.base_currency)
            return amount
        return amount * rate

    @staticmethod
    def currency_symbol(currency: str) -> str:
        return currency_symbol(currency)

    def clear_cache(self) -> None:
        self._cache.delete(FX_CACHE_KEY)

    def _normalize(self, currencies: Optional[Iterable[str]]) -> list[str]:
        if currencies is None:
            return list(self._default_currencies)
        return [c.strip().upper() for c in currencies if c and c.strip()]

    def _fetch(self, currencies: list[str]) -> dict[str, Decimal]:
        if self._provider is None:
            raise ExternalFetchError("FX provider", "not configured")
        try:
            return dict(self._provider.fetch_rates(currencies))
        except ExternalFetchError:
            raise
        except Exception as exc:
            raise ExternalFetchError("FX provider", str(exc)) from exc
