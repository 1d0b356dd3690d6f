"""Closed position analysis: realized results of fully exited instruments."""

from decimal import Decimal

from stonks.core.degrade import degrade_on_persistence_error
from stonks.domain.views import ClosedPosition, ClosedPositionTotals
from stonks.repositories.protocols import HoldingRepository, TransactionRepository
from stonks.services.position_service import tally_transactions


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    if whole > 0:
        return part / whole * 100
    return Decimal("0")


class ClosedPositionAnalyzer:
    """Finds codes whose ledger quantity is back to zero and reports their P/L."""

    def __init__(self, holding_repo: HoldingRepository, transaction_repo: TransactionRepository):
        self._holding_repo = holding_repo
        self._transaction_repo = transaction_repo

    @degrade_on_persistence_error(default=[])
    def get_closed_positions(self) -> list[ClosedPosition]:
        """One entry per closed code, sorted by code."""
        tallies = tally_transactions(self._transaction_repo.list_all())
        names = {h.code: h.name for h in self._holding_repo.list_all()}

        closed = []
        for code in sorted(tallies):
            tally = tallies[code]
            if not tally.is_closed:
                continue
            profit_loss = tally.total_revenue - tally.total_cost
            closed.append(
                ClosedPosition(
                    code=code,
                    name=names.get(code, code),
                    total_cost=tally.total_cost,
                    total_revenue=tally.total_revenue,
                    profit_loss=profit_loss,
                    profit_loss_percent=_percent(profit_loss, tally.total_cost),
                    transaction_count=tally.transaction_count,
                )
            )
        return closed

    @staticmethod
    def summarize(closed: list[ClosedPosition]) -> ClosedPositionTotals:
        """Footer totals across closed positions."""
        total_cost = sum((c.total_cost for c in closed), Decimal("0"))
        total_revenue = sum((c.total_revenue for c in closed), Decimal("0"))
        profit_loss = total_revenue - total_cost
        return ClosedPositionTotals(
            total_cost=total_cost,
            total_revenue=total_revenue,
            profit_loss=profit_loss,
            profit_loss_percent=_percent(profit_loss, total_cost),
            count=len(closed),
        )
