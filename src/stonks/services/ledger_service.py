"""Ledger service: holdings, transactions and portfolio settings."""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from stonks.core.degrade import degrade_on_persistence_error
from stonks.core.exceptions import NotFoundError, ValidationError
from stonks.core.timezone import now_eastern
from stonks.domain.models import Holding, SettingKey, Transaction, TransactionType
from stonks.repositories.protocols import (
    HoldingRepository,
    SettingsRepository,
    TransactionRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_PORTFOLIO_NAME = "My Portfolio"

# EXCHANGE:SYMBOL, or a bare SYMBOL
_CODE_PATTERN = re.compile(r"^[A-Z0-9._\-]+(:[A-Z0-9._\-^=]+)?$")


class LedgerService:
    """
    Service for mutating and reading the ledger.

    Every mutation is validated in full before the first write, so a
    rejected request never leaves a partial change behind. Persistence
    failures are degraded to safe return values (see core.degrade).
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        transaction_repo: TransactionRepository,
        settings_repo: SettingsRepository,
    ):
        self._holding_repo = holding_repo
        self._transaction_repo = transaction_repo
        self._settings_repo = settings_repo

    # Holdings

    @degrade_on_persistence_error(default=[])
    def list_holdings(self) -> list[Holding]:
        """List all holding rows ordered by id."""
        return self._holding_repo.list_all()

    @degrade_on_persistence_error(default=None)
    def add_holding(
        self,
        name: str,
        code: str,
        target_weight: Optional[Decimal] = None,
    ) -> Optional[Holding]:
        """Add a holding row. Returns None if the write failed."""
        holding = Holding(
            id=None,
            name=self._clean_name(name),
            code=self.clean_code(code),
            target_weight=self._clean_target_weight(target_weight),
            visible=True,
            created_at=now_eastern(),
        )
        return self._holding_repo.create(holding)

    @degrade_on_persistence_error(default=None)
    def update_holding(
        self,
        holding_id: int,
        name: str,
        code: str,
        target_weight: Optional[Decimal] = None,
    ) -> Optional[Holding]:
        """Replace name, code and target weight of an existing holding."""
        clean_name = self._clean_name(name)
        clean_code = self.clean_code(code)
        clean_weight = self._clean_target_weight(target_weight)

        holding = self._require_holding(holding_id)
        holding.name = clean_name
        holding.code = clean_code
        holding.target_weight = clean_weight
        holding.updated_at = now_eastern()
        return self._holding_repo.update(holding)

    @degrade_on_persistence_error(default=False)
    def delete_holding(self, holding_id: int) -> bool:
        """Delete a holding row. Its transactions stay in the ledger."""
        return self._holding_repo.delete(holding_id)

    @degrade_on_persistence_error(default=None)
    def toggle_holding_visibility(self, holding_id: int) -> Optional[Holding]:
        """Flip the visibility flag of a holding."""
        holding = self._require_holding(holding_id)
        holding.visible = not holding.visible
        holding.updated_at = now_eastern()
        return self._holding_repo.update(holding)

    # Transactions

    @degrade_on_persistence_error(default=None)
    def add_transaction(
        self,
        code: str,
        txn_type: Union[TransactionType, str],
        txn_date: Optional[date],
        quantity: Optional[Decimal],
        gross_value: Optional[Decimal],
        fee: Optional[Decimal] = None,
    ) -> Optional[Transaction]:
        """
        Append a BUY or SELL to the ledger.

        ``gross_value`` is the total traded value of the transaction, not a
        per-share price.
        """
        transaction = Transaction(
            id=None,
            code=self.clean_code(code),
            txn_type=self._clean_txn_type(txn_type),
            txn_date=self._clean_date(txn_date),
            quantity=self._require_amount(quantity, "quantity", allow_zero=False),
            gross_value=self._require_amount(gross_value, "value", allow_zero=True),
            fee=self._require_amount(
                fee if fee is not None else Decimal("0"), "fee", allow_zero=True
            ),
            created_at=now_eastern(),
        )
        return self._transaction_repo.create(transaction)

    @degrade_on_persistence_error(default=False)
    def delete_transaction(self, txn_id: int) -> bool:
        """Delete a transaction. There is no edit; delete and re-add instead."""
        return self._transaction_repo.delete(txn_id)

    @degrade_on_persistence_error(default=[])
    def list_transactions(self) -> list[Transaction]:
        """All transactions ordered by date."""
        return self._transaction_repo.list_all()

    @degrade_on_persistence_error(default=[])
    def transactions_for(self, code: str) -> list[Transaction]:
        """Transactions of one code ordered by date."""
        return self._transaction_repo.list_by_code(code.strip().upper())

    # Settings

    @degrade_on_persistence_error(default=Decimal("0"))
    def get_cash_amount(self) -> Decimal:
        """Uninvested cash held in the portfolio (0 when unset)."""
        raw = self._settings_repo.get(SettingKey.CASH_AMOUNT.value)
        if raw is None or raw == "":
            return Decimal("0")
        try:
            return Decimal(raw)
        except InvalidOperation:
            logger.warning("Ignoring malformed cash_amount setting %r", raw)
            return Decimal("0")

    @degrade_on_persistence_error(default=False)
    def update_cash_amount(self, amount: Decimal) -> bool:
        """Overwrite the cash amount."""
        amount = self.clean_cash_amount(amount)
        self._settings_repo.set(SettingKey.CASH_AMOUNT.value, str(amount))
        return True

    @degrade_on_persistence_error(default=DEFAULT_PORTFOLIO_NAME)
    def get_portfolio_name(self) -> str:
        """Display name of the portfolio."""
        return self._settings_repo.get(SettingKey.PORTFOLIO_NAME.value) or DEFAULT_PORTFOLIO_NAME

    @degrade_on_persistence_error(default=False)
    def update_portfolio_name(self, name: str) -> bool:
        """Overwrite the portfolio display name."""
        self._settings_repo.set(SettingKey.PORTFOLIO_NAME.value, self._clean_name(name))
        return True

    @degrade_on_persistence_error(default=False)
    def update_settings(self, portfolio_name: str, cash_amount: Decimal) -> bool:
        """Overwrite name and cash together; both are validated before either write."""
        clean_name = self._clean_name(portfolio_name)
        clean_cash = self.clean_cash_amount(cash_amount)
        self._settings_repo.set_many(
            {
                SettingKey.CASH_AMOUNT.value: str(clean_cash),
                SettingKey.PORTFOLIO_NAME.value: clean_name,
            }
        )
        return True

    # Validation helpers

    def _require_holding(self, holding_id: int) -> Holding:
        holding = self._holding_repo.get_by_id(holding_id)
        if not holding:
            raise NotFoundError("Holding", str(holding_id))
        return holding

    @staticmethod
    def clean_code(code: Optional[str]) -> str:
        """Normalize an instrument code (trimmed, upper-case) and check its shape."""
        value = (code or "").strip().upper()
        if not value:
            raise ValidationError("Code is required")
        if not _CODE_PATTERN.match(value):
            raise ValidationError(f"Code must look like EXCHANGE:SYMBOL, got {code!r}")
        return value

    @staticmethod
    def clean_cash_amount(amount: Optional[Decimal]) -> Decimal:
        if amount is None or not amount.is_finite():
            raise ValidationError("Cash amount must be a number")
        return amount

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        value = (name or "").strip()
        if not value:
            raise ValidationError("Name is required")
        if len(value) > 255:
            raise ValidationError("Name must be at most 255 characters")
        return value

    @staticmethod
    def _clean_target_weight(weight: Optional[Decimal]) -> Optional[Decimal]:
        if weight is None:
            return None
        if not weight.is_finite() or weight < 0 or weight > 100:
            raise ValidationError("Target weight must be between 0 and 100")
        return weight

    @staticmethod
    def _clean_txn_type(txn_type: Union[TransactionType, str]) -> TransactionType:
        if isinstance(txn_type, TransactionType):
            return txn_type
        try:
            return TransactionType((txn_type or "").strip().lower())
        except ValueError:
            raise ValidationError(f"Transaction type must be buy or sell, got {txn_type!r}")

    @staticmethod
    def _clean_date(txn_date: Optional[date]) -> date:
        if txn_date is None:
            raise ValidationError("Transaction date is required")
        return txn_date

    @staticmethod
    def _require_amount(value: Optional[Decimal], field: str, allow_zero: bool) -> Decimal:
        if value is None or not value.is_finite():
            raise ValidationError(f"{field} must be a number")
        if value < 0 or (value == 0 and not allow_zero):
            bound = ">= 0" if allow_zero else "> 0"
            raise ValidationError(f"{field} must be {bound}")
        return value
