"""View models for market data (quotes and cache introspection)."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from stonks.domain.views.portfolio import PositionView


@dataclass(frozen=True)
class ProviderQuote:
    """Raw quote fields as returned by a quote provider."""

    current: Decimal
    high: Decimal
    low: Decimal
    open: Decimal
    previous_close: Decimal
    timestamp: int


@dataclass(frozen=True)
class Quote:
    """Realtime quote for a normalized symbol."""

    symbol: str
    current: Decimal
    high: Decimal
    low: Decimal
    open: Decimal
    previous_close: Decimal
    change_abs: Decimal
    change_pct: Decimal
    timestamp: int


@dataclass(frozen=True)
class QuoteResult:
    """Outcome of one symbol in a batch lookup: a quote or an error message."""

    symbol: str
    quote: Optional[Quote] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.quote is not None


@dataclass
class PortfolioQuote:
    """A position enriched with its quote and open gain figures."""

    position: PositionView
    quote: Optional[Quote] = None
    market_value: Optional[Decimal] = None
    cost_basis: Optional[Decimal] = None
    gain: Optional[Decimal] = None
    gain_percent: Optional[Decimal] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.quote is not None and self.error is None

    @property
    def code(self) -> str:
        return self.position.code

    @property
    def name(self) -> str:
        return self.position.name

    @property
    def quantity(self) -> Decimal:
        return self.position.quantity

    @property
    def target_weight(self) -> Optional[Decimal]:
        return self.position.target_weight


@dataclass
class CacheStats:
    """Quote cache introspection for "last updated" reporting."""

    size: int
    symbols: list[str] = field(default_factory=list)
    ttl_ms: int = 0
    oldest_timestamp: Optional[float] = None
    newest_timestamp: Optional[float] = None
