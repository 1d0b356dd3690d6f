"""View models for ledger-derived portfolio state."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


def format_number(value: Decimal) -> str:
    """Render a Decimal without exponent or trailing zeros (``10.50`` -> ``10.5``)."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


@dataclass
class PositionView:
    """A holding row with its ledger-derived quantity and cost basis."""

    id: Optional[int]
    name: str
    code: str
    quantity: Decimal
    cost_basis: Optional[Decimal] = None
    target_weight: Optional[Decimal] = None
    visible: bool = True

    @property
    def has_target(self) -> bool:
        return self.target_weight is not None


@dataclass(frozen=True)
class WeightedTerm:
    """One ``quantity * code`` term of the virtual portfolio."""

    quantity: Decimal
    code: str

    def to_expression(self) -> str:
        return f"{format_number(self.quantity)}*{self.code}"


@dataclass
class VirtualPortfolio:
    """
    Aggregate chart entry: an ordered weighted sum of holdings plus cash.

    Kept as typed terms; ``to_expression`` is only called when the entry is
    handed to a chart.
    """

    name: str
    terms: list[WeightedTerm] = field(default_factory=list)
    cash: Optional[Decimal] = None

    def to_expression(self) -> str:
        parts = [term.to_expression() for term in self.terms]
        if self.cash is not None and self.cash > 0:
            parts.append(format_number(self.cash))
        return "+".join(parts)


@dataclass(frozen=True)
class ChartEntry:
    """A (display name, chart symbol) pair for chart widgets."""

    name: str
    symbol: str
    is_virtual: bool = False


@dataclass
class ClosedPosition:
    """Realized result of a fully exited instrument."""

    code: str
    name: str
    total_cost: Decimal
    total_revenue: Decimal
    profit_loss: Decimal
    profit_loss_percent: Decimal
    transaction_count: int


@dataclass
class ClosedPositionTotals:
    """Footer totals across all closed positions."""

    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    total_revenue: Decimal = field(default_factory=lambda: Decimal("0"))
    profit_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    profit_loss_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    count: int = 0
