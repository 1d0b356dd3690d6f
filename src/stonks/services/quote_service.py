"""
Quote service: realtime quotes behind a per-symbol TTL cache.

Batch lookups fan out one provider call per distinct symbol on a thread
pool and join before returning; a failing symbol is reported in its own
result and never aborts the rest of the batch.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Callable, Optional

from stonks.cache import CacheStore, InMemoryCacheStore
from stonks.core.exceptions import AppError, ExternalFetchError, ValidationError
from stonks.core.timezone import now_millis
from stonks.domain.views import (
    CacheStats,
    PortfolioQuote,
    PositionView,
    ProviderQuote,
    Quote,
    QuoteResult,
)
from stonks.providers.base import QuoteProvider

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 60_000
DEFAULT_MAX_WORKERS = 8
VALIDATION_PROBE_SYMBOL = "AAPL"


def normalize_symbol(code: str) -> str:
    """Strip the exchange prefix and normalize case (``BATS:voo`` -> ``VOO``)."""
    value = (code or "").strip()
    if ":" in value:
        value = value.split(":", 1)[1]
    return value.strip().upper()


def _build_quote(symbol: str, raw: ProviderQuote) -> Quote:
    change_abs = raw.current - raw.previous_close
    if raw.previous_close:
        change_pct = change_abs / raw.previous_close * 100
    else:
        change_pct = Decimal("0")
    return Quote(
        symbol=symbol,
        current=raw.current,
        high=raw.high,
        low=raw.low,
        open=raw.open,
        previous_close=raw.previous_close,
        change_abs=change_abs,
        change_pct=change_pct,
        timestamp=raw.timestamp,
    )


class QuoteService:
    """
    Cached quote lookups.

    The cache is keyed by normalized symbol. Freshness is decided on read
    (``age < ttl_ms``); stale entries are simply overwritten by the next
    fetch. Two concurrent misses for the same symbol may both reach the
    provider.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        cache: Optional[CacheStore] = None,
        ttl_ms: int = DEFAULT_TTL_MS,
        max_workers: int = DEFAULT_MAX_WORKERS,
        clock: Callable[[], float] = now_millis,
    ):
        self._provider = provider
        self._clock = clock
        self._cache = cache if cache is not None else InMemoryCacheStore(clock=clock)
        self._ttl_ms = ttl_ms
        self._max_workers = max(1, max_workers)

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    def get(self, symbol: str) -> Quote:
        """
        Return the quote for a symbol, from cache when fresh.

        Raises:
            ValidationError: If the symbol is empty.
            ExternalFetchError: If the provider call fails.
        """
        key = normalize_symbol(symbol)
        if not key:
            raise ValidationError("Symbol is required")

        entry = self._cache.get(key)
        if entry is not None and entry.is_fresh(self._clock(), self._ttl_ms):
            logger.debug("Quote cache hit for %s", key)
            return entry.value

        raw = self._fetch(key)
        quote = _build_quote(key, raw)
        self._cache.set(key, quote)
        return quote

    def get_many(self, symbols: list[str]) -> list[QuoteResult]:
        """Batch lookup; results follow input order, failures are per symbol."""
        if not symbols:
            return []
        unique = list(dict.fromkeys(normalize_symbol(s) for s in symbols))
        outcomes = dict(zip(unique, self._fan_out(unique)))
        return [outcomes[normalize_symbol(s)] for s in symbols]

    def get_portfolio_quotes(self, holdings: list[PositionView]) -> list[PortfolioQuote]:
        """Attach quote, market value and open gain to each holding."""
        results = self.get_many([h.code for h in holdings])
        return [self._enrich(h, r) for h, r in zip(holdings, results)]

    # Cache introspection

    def cache_stats(self) -> CacheStats:
        entries = self._cache.entries()
        timestamps = [e.timestamp for e in entries]
        return CacheStats(
            size=len(entries),
            symbols=sorted(e.key for e in entries),
            ttl_ms=self._ttl_ms,
            oldest_timestamp=min(timestamps) if timestamps else None,
            newest_timestamp=max(timestamps) if timestamps else None,
        )

    def oldest_cache_timestamp(self) -> Optional[float]:
        return self.cache_stats().oldest_timestamp

    def newest_cache_timestamp(self) -> Optional[float]:
        return self.cache_stats().newest_timestamp

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Quote cache cleared")

    def clear_cached_quote(self, symbol: str) -> None:
        self._cache.delete(normalize_symbol(symbol))

    def validate_provider(self) -> bool:
        """Probe the provider with a well-known symbol. Never raises."""
        try:
            self.get(VALIDATION_PROBE_SYMBOL)
        except AppError as exc:
            logger.warning("Quote provider validation failed: %s", exc.message)
            return False
        return True

    # Internals

    def _fetch(self, symbol: str) -> ProviderQuote:
        try:
            return self._provider.fetch_quote(symbol)
        except ExternalFetchError as exc:
            logger.warning("Quote fetch failed for %s: %s", symbol, exc.message)
            raise
        except Exception as exc:
            logger.warning("Quote fetch failed for %s: %s", symbol, exc)
            raise ExternalFetchError("Quote provider", str(exc)) from exc

    def _lookup(self, symbol: str) -> QuoteResult:
        try:
            return QuoteResult(symbol=symbol, quote=self.get(symbol))
        except AppError as exc:
            return QuoteResult(symbol=symbol, error=exc.message)

    def _fan_out(self, symbols: list[str]) -> list[QuoteResult]:
        if len(symbols) == 1:
            return [self._lookup(symbols[0])]
        workers = min(self._max_workers, len(symbols))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="quote-fetch") as executor:
            return list(executor.map(self._lookup, symbols))

    @staticmethod
    def _enrich(position: PositionView, result: QuoteResult) -> PortfolioQuote:
        if not result.ok:
            return PortfolioQuote(position=position, error=result.error)

        quote = result.quote
        market_value = position.quantity * quote.current
        if position.cost_basis is not None:
            cost_basis = position.cost_basis
        else:
            cost_basis = quote.previous_close * position.quantity
        gain = market_value - cost_basis
        gain_percent = gain / cost_basis * 100 if cost_basis > 0 else Decimal("0")
        return PortfolioQuote(
            position=position,
            quote=quote,
            market_value=market_value,
            cost_basis=cost_basis,
            gain=gain,
            gain_percent=gain_percent,
        )
