"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from stonks.domain.models.enums import TransactionType


@dataclass
class Transaction:
    """
    Ledger transaction entry (source of truth).

    Append/delete only: there is no update path. ``gross_value`` is the
    total traded value (not a unit price), fees are recorded separately.
    """

    id: Optional[int]
    code: str
    txn_type: TransactionType
    txn_date: date
    quantity: Decimal
    gross_value: Decimal
    fee: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            self.txn_type = TransactionType(self.txn_type.lower())

    @property
    def signed_quantity(self) -> Decimal:
        """Quantity with sign: positive for BUY, negative for SELL."""
        if self.txn_type == TransactionType.BUY:
            return self.quantity
        return -self.quantity

    @property
    def cost(self) -> Decimal:
        """Capital put in by a BUY (value + fee); zero for SELL."""
        if self.txn_type == TransactionType.BUY:
            return self.gross_value + self.fee
        return Decimal("0")

    @property
    def proceeds(self) -> Decimal:
        """Capital taken out by a SELL (value - fee); zero for BUY."""
        if self.txn_type == TransactionType.SELL:
            return self.gross_value - self.fee
        return Decimal("0")
