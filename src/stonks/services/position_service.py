"""Position service: quantities and cost basis derived from the ledger."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from stonks.core.degrade import degrade_on_persistence_error
from stonks.domain.models import Holding, Transaction, TransactionType
from stonks.domain.views import ChartEntry, PositionView, VirtualPortfolio, WeightedTerm
from stonks.repositories.protocols import HoldingRepository, TransactionRepository
from stonks.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


@dataclass
class LedgerTally:
    """Running totals of every transaction recorded for one code."""

    code: str
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    total_revenue: Decimal = field(default_factory=lambda: Decimal("0"))
    buy_count: int = 0
    transaction_count: int = 0

    def add(self, txn: Transaction) -> None:
        self.quantity += txn.signed_quantity
        self.total_cost += txn.cost
        self.total_revenue += txn.proceeds
        self.transaction_count += 1
        if txn.txn_type == TransactionType.BUY:
            self.buy_count += 1

    @property
    def is_closed(self) -> bool:
        return self.transaction_count > 0 and self.quantity == 0


def tally_transactions(transactions: Iterable[Transaction]) -> dict[str, LedgerTally]:
    """Fold transactions into per-code tallies. Summation order does not matter."""
    tallies: dict[str, LedgerTally] = {}
    for txn in transactions:
        tally = tallies.get(txn.code)
        if tally is None:
            tally = tallies[txn.code] = LedgerTally(code=txn.code)
        tally.add(txn)
    return tallies


class PositionService:
    """
    Derives holdings state from the transaction ledger.

    Quantities are never stored: every read folds the ledger again.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        transaction_repo: TransactionRepository,
        ledger: LedgerService,
        virtual_portfolio_exchange: str = "BATS",
    ):
        self._holding_repo = holding_repo
        self._transaction_repo = transaction_repo
        self._ledger = ledger
        self._exchange_prefix = f"{virtual_portfolio_exchange.strip().upper()}:"

    @degrade_on_persistence_error(default=Decimal("0"))
    def quantity(self, code: str) -> Decimal:
        """Net quantity of a code (buys minus sells). Unknown code -> 0."""
        code = (code or "").strip().upper()
        tally = tally_transactions(self._transaction_repo.list_by_code(code))
        return tally[code].quantity if code in tally else Decimal("0")

    @degrade_on_persistence_error(default=Decimal("0"))
    def cost_basis(self, code: str) -> Decimal:
        """Total capital invested in a code: buy value plus buy fee, sells ignored."""
        code = (code or "").strip().upper()
        tally = tally_transactions(self._transaction_repo.list_by_code(code))
        return tally[code].total_cost if code in tally else Decimal("0")

    @degrade_on_persistence_error(default=[])
    def get_holdings(self) -> list[PositionView]:
        """All holding rows with ledger quantity and cost basis attached."""
        holdings = self._holding_repo.list_all()
        tallies = tally_transactions(self._transaction_repo.list_all())
        return [self._to_position(h, tallies.get(h.code)) for h in holdings]

    def get_visible_holdings(self) -> list[PositionView]:
        return [p for p in self.get_holdings() if p.visible]

    def get_hidden_holdings(self) -> list[PositionView]:
        return [p for p in self.get_holdings() if not p.visible]

    def get_active_holdings(self, include_targeted: bool = False) -> list[PositionView]:
        """
        Visible holdings that take part in valuation.

        A holding is active when it has a positive quantity; with
        ``include_targeted`` a target weight is also enough, so a position
        not yet bought can still receive a BUY recommendation.
        """
        return [
            p
            for p in self.get_visible_holdings()
            if p.quantity > 0 or (include_targeted and p.has_target)
        ]

    def build_virtual_portfolio(
        self,
        positions: list[PositionView],
        cash: Decimal,
        name: str,
    ) -> Optional[VirtualPortfolio]:
        """
        Build the aggregate chart entry from positions on the chart exchange.

        Returns None when no position qualifies and there is no cash to show.
        """
        terms = [
            WeightedTerm(quantity=p.quantity, code=p.code)
            for p in positions
            if p.code.startswith(self._exchange_prefix) and p.quantity > 0
        ]
        has_cash = cash is not None and cash > 0
        if not terms and not has_cash:
            return None
        return VirtualPortfolio(name=name, terms=terms, cash=cash if has_cash else None)

    def get_chart_entries(self) -> list[ChartEntry]:
        """Virtual portfolio first (when there is one), then every visible holding."""
        positions = self.get_holdings()
        virtual = self.build_virtual_portfolio(
            positions,
            cash=self._ledger.get_cash_amount(),
            name=self._ledger.get_portfolio_name(),
        )

        entries: list[ChartEntry] = []
        if virtual is not None:
            entries.append(
                ChartEntry(name=virtual.name, symbol=virtual.to_expression(), is_virtual=True)
            )
        entries.extend(ChartEntry(name=p.name, symbol=p.code) for p in positions if p.visible)
        return entries

    @staticmethod
    def _to_position(holding: Holding, tally: Optional[LedgerTally]) -> PositionView:
        quantity = tally.quantity if tally else Decimal("0")
        # A closed position carries no open cost; its result is realized instead
        cost_basis = None
        if tally and tally.buy_count and quantity != 0:
            cost_basis = tally.total_cost
        return PositionView(
            id=holding.id,
            name=holding.name,
            code=holding.code,
            quantity=quantity,
            cost_basis=cost_basis,
            target_weight=holding.target_weight,
            visible=holding.visible,
        )
