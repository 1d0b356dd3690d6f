"""
Pytest configuration and fixtures for the stonks test-suite.

This module provides:
- In-memory SQLite database fixtures
- A controllable millisecond clock for cache tests
- Deterministic and failing quote / FX providers
- Service and repository fixtures
- Factory helpers for holdings and transactions
"""

import threading
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from stonks.main import app
from stonks.api import deps
from stonks.cache import InMemoryCacheStore
from stonks.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from stonks.repositories.sqlalchemy import orm_models  # noqa: F401
from stonks.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemySettingsRepository,
)
from stonks.services import (
    ClosedPositionAnalyzer,
    ConfigActionService,
    FxService,
    LedgerService,
    PositionService,
    QuoteService,
    Rebalancer,
    ValuationService,
)
from stonks.core.exceptions import ExternalFetchError
from stonks.domain.models import Holding, Transaction, TransactionType
from stonks.domain.views import PortfolioQuote, PositionView, ProviderQuote, Quote
from stonks.config.settings import reset_settings


# =============================================================================
# CLOCK HELPERS
# =============================================================================


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


ONE_MINUTE_MS = 60_000
ONE_HOUR_MS = 3_600_000


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock shared by caches and services."""
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    """Provide test HoldingRepository."""
    return SqlAlchemyHoldingRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def settings_repo(test_session) -> SqlAlchemySettingsRepository:
    """Provide test SettingsRepository."""
    return SqlAlchemySettingsRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicQuoteProvider:
    """
    Deterministic quote provider for testing.

    Provides fixed quotes with no randomness and records every call.
    Unknown symbols fail like a provider 404 would.
    """

    FIXED_QUOTES = {
        "AAPL": (Decimal("185.50"), Decimal("184.25")),  # +1.25
        "MSFT": (Decimal("378.25"), Decimal("376.80")),  # +1.45
        "VOO": (Decimal("100.00"), Decimal("98.00")),  # +2.00
        "VXUS": (Decimal("50.00"), Decimal("51.00")),  # -1.00 (down)
        "AAAU": (Decimal("20.00"), Decimal("20.00")),  # flat
    }

    def __init__(self):
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch_quote(self, symbol: str) -> ProviderQuote:
        with self._lock:
            self.calls.append(symbol)
        if symbol not in self.FIXED_QUOTES:
            raise ExternalFetchError("Deterministic", f"no quote for {symbol}")
        current, previous_close = self.FIXED_QUOTES[symbol]
        return ProviderQuote(
            current=current,
            high=max(current, previous_close),
            low=min(current, previous_close),
            open=previous_close,
            previous_close=previous_close,
            timestamp=1_718_467_200,
        )


class FailingQuoteProvider:
    """Quote provider that always raises an exception."""

    def fetch_quote(self, symbol: str) -> ProviderQuote:
        raise ConnectionError("Network unavailable")


class DeterministicFxProvider:
    """FX provider with a fixed USD rate table; can be switched to failing."""

    RATES = {
        "SGD": Decimal("1.34"),
        "AUD": Decimal("1.51"),
        "EUR": Decimal("0.92"),
    }

    def __init__(self, rates: Optional[dict[str, Decimal]] = None):
        self.base_currency = "USD"
        self.rates = dict(rates or self.RATES)
        self.fail = False
        self.calls = 0
        self.last_requested: list[str] = []

    def fetch_rates(self, currencies: list[str]) -> dict[str, Decimal]:
        self.calls += 1
        self.last_requested = list(currencies)
        if self.fail:
            raise ExternalFetchError("Deterministic FX", "service unavailable")
        return {c: self.rates[c] for c in currencies if c in self.rates}


@pytest.fixture
def quote_provider() -> DeterministicQuoteProvider:
    """Provide deterministic quote provider."""
    return DeterministicQuoteProvider()


@pytest.fixture
def fx_provider() -> DeterministicFxProvider:
    """Provide deterministic FX provider."""
    return DeterministicFxProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(holding_repo, transaction_repo, settings_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(
        holding_repo=holding_repo,
        transaction_repo=transaction_repo,
        settings_repo=settings_repo,
    )


@pytest.fixture
def position_service(holding_repo, transaction_repo, ledger_service) -> PositionService:
    """Provide test PositionService."""
    return PositionService(
        holding_repo=holding_repo,
        transaction_repo=transaction_repo,
        ledger=ledger_service,
        virtual_portfolio_exchange="BATS",
    )


@pytest.fixture
def closed_position_analyzer(holding_repo, transaction_repo) -> ClosedPositionAnalyzer:
    """Provide test ClosedPositionAnalyzer."""
    return ClosedPositionAnalyzer(holding_repo=holding_repo, transaction_repo=transaction_repo)


@pytest.fixture
def quote_service(quote_provider, clock) -> QuoteService:
    """Provide test QuoteService with deterministic provider and fake clock."""
    return QuoteService(
        provider=quote_provider,
        cache=InMemoryCacheStore(clock=clock),
        ttl_ms=ONE_MINUTE_MS,
        max_workers=4,
        clock=clock,
    )


@pytest.fixture
def fx_service(fx_provider, clock) -> FxService:
    """Provide test FxService with deterministic provider and fake clock."""
    return FxService(
        provider=fx_provider,
        cache=InMemoryCacheStore(clock=clock),
        ttl_seconds=3600,
        clock=clock,
    )


@pytest.fixture
def rebalancer() -> Rebalancer:
    return Rebalancer()


@pytest.fixture
def valuation_service(
    position_service,
    closed_position_analyzer,
    quote_service,
    fx_service,
    ledger_service,
    rebalancer,
) -> ValuationService:
    """Provide test ValuationService."""
    return ValuationService(
        positions=position_service,
        closed_positions=closed_position_analyzer,
        quotes=quote_service,
        fx=fx_service,
        ledger=ledger_service,
        rebalancer=rebalancer,
    )


@pytest.fixture
def config_action_service(ledger_service) -> ConfigActionService:
    """Provide test ConfigActionService."""
    return ConfigActionService(ledger=ledger_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def holding_factory(ledger_service) -> Callable[..., Holding]:
    """Factory for creating test holdings."""

    def _create_holding(
        code: str,
        name: Optional[str] = None,
        target_weight: Optional[Decimal] = None,
    ) -> Holding:
        return ledger_service.add_holding(
            name=name or code.split(":")[-1],
            code=code,
            target_weight=target_weight,
        )

    return _create_holding


@pytest.fixture
def transaction_factory(ledger_service) -> Callable[..., Transaction]:
    """Factory for creating test transactions."""

    def _create_transaction(
        code: str,
        txn_type: TransactionType,
        quantity: Decimal,
        value: Decimal,
        fee: Decimal = Decimal("0"),
        txn_date: date = date(2024, 1, 15),
    ) -> Transaction:
        return ledger_service.add_transaction(
            code=code,
            txn_type=txn_type,
            txn_date=txn_date,
            quantity=quantity,
            gross_value=value,
            fee=fee,
        )

    return _create_transaction


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, quote_service, fx_service, tmp_path, monkeypatch) -> TestClient:
    """Provide FastAPI test client with test database and deterministic market data."""
    # The lifespan hook initialises the configured database; keep it in tmp
    monkeypatch.setenv("STONKS_DATA_DIR", str(tmp_path))
    reset_settings()
    reset_database()

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_quote_service] = lambda: quote_service
    app.dependency_overrides[deps.get_fx_service] = lambda: fx_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def make_position(
    code: str,
    quantity: Decimal,
    cost_basis: Optional[Decimal] = None,
    target_weight: Optional[Decimal] = None,
    name: Optional[str] = None,
    visible: bool = True,
) -> PositionView:
    """Build a PositionView without touching the database."""
    return PositionView(
        id=None,
        name=name or code,
        code=code,
        quantity=quantity,
        cost_basis=cost_basis,
        target_weight=target_weight,
        visible=visible,
    )


def make_quote(
    symbol: str,
    current: Decimal,
    previous_close: Optional[Decimal] = None,
) -> Quote:
    """Build a Quote with change figures derived from previous close."""
    previous_close = current if previous_close is None else previous_close
    change_abs = current - previous_close
    change_pct = change_abs / previous_close * 100 if previous_close else Decimal("0")
    return Quote(
        symbol=symbol,
        current=current,
        high=max(current, previous_close),
        low=min(current, previous_close),
        open=previous_close,
        previous_close=previous_close,
        change_abs=change_abs,
        change_pct=change_pct,
        timestamp=0,
    )


def make_portfolio_quote(
    code: str,
    quantity: Decimal,
    price: Decimal,
    cost_basis: Optional[Decimal] = None,
    target_weight: Optional[Decimal] = None,
    previous_close: Optional[Decimal] = None,
) -> PortfolioQuote:
    """Build a priced PortfolioQuote the way QuoteService would."""
    position = make_position(code, quantity, cost_basis=cost_basis, target_weight=target_weight)
    quote = make_quote(code.split(":")[-1], price, previous_close)
    market_value = quantity * price
    basis = cost_basis if cost_basis is not None else quote.previous_close * quantity
    gain = market_value - basis
    return PortfolioQuote(
        position=position,
        quote=quote,
        market_value=market_value,
        cost_basis=basis,
        gain=gain,
        gain_percent=gain / basis * 100 if basis > 0 else Decimal("0"),
    )


def make_failed_quote(code: str, quantity: Decimal, error: str = "boom") -> PortfolioQuote:
    return PortfolioQuote(position=make_position(code, quantity), error=error)
