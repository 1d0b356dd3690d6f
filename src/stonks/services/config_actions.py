"""
Config action dispatch: form-style mutation requests against the ledger.

Each request names an ``action`` and carries string parameters as a form
would post them. Parsing and validation failures come back as a failed
ActionResult; nothing is raised to the caller.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Optional

from stonks.core.exceptions import AppError, UnknownActionError, ValidationError
from stonks.core.timezone import parse_trade_date
from stonks.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

Params = Mapping[str, Any]


@dataclass(frozen=True)
class ActionResult:
    success: bool
    error: Optional[str] = None


def _text(params: Params, key: str) -> str:
    value = params.get(key)
    return "" if value is None else str(value).strip()


def _decimal(params: Params, key: str, required: bool = True) -> Optional[Decimal]:
    """Parse a decimal field; an empty optional field is None."""
    raw = _text(params, key)
    if not raw:
        if required:
            raise ValidationError(f"{key} is required")
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ValidationError(f"{key} must be a number, got {raw!r}")
    if not value.is_finite():
        raise ValidationError(f"{key} must be a number, got {raw!r}")
    return value


def _int(params: Params, key: str) -> int:
    raw = _text(params, key)
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{key} must be an integer, got {raw!r}")


class ConfigActionService:
    """Maps action names onto LedgerService mutations."""

    def __init__(self, ledger: LedgerService):
        self._ledger = ledger
        self._handlers: dict[str, Callable[[Params], bool]] = {
            "update_settings": self._update_settings,
            "add_holding": self._add_holding,
            "update_holding": self._update_holding,
            "delete_holding": self._delete_holding,
            "toggle_visibility": self._toggle_visibility,
            "add_transaction": self._add_transaction,
            "delete_transaction": self._delete_transaction,
        }

    @property
    def actions(self) -> list[str]:
        return sorted(self._handlers)

    def dispatch(self, action: Optional[str], params: Params) -> ActionResult:
        """Run one action. Never raises; failures are reported in the result."""
        try:
            handler = self._handlers.get((action or "").strip())
            if handler is None:
                raise UnknownActionError(action or "")
            applied = handler(params)
        except AppError as exc:
            logger.info("Config action %r rejected: %s", action, exc.message)
            return ActionResult(success=False, error=exc.message)

        if not applied:
            return ActionResult(success=False, error=f"Action {action} could not be applied")
        logger.info("Config action %r applied", action)
        return ActionResult(success=True)

    # Handlers: parse every field first, then hand over to the ledger

    def _update_settings(self, params: Params) -> bool:
        name = _text(params, "portfolio_name")
        cash = _decimal(params, "cash_amount")
        return self._ledger.update_settings(name, cash)

    def _add_holding(self, params: Params) -> bool:
        holding = self._ledger.add_holding(
            name=_text(params, "name"),
            code=_text(params, "code"),
            target_weight=_decimal(params, "target_weight", required=False),
        )
        return holding is not None

    def _update_holding(self, params: Params) -> bool:
        holding = self._ledger.update_holding(
            holding_id=_int(params, "holding_id"),
            name=_text(params, "name"),
            code=_text(params, "code"),
            target_weight=_decimal(params, "target_weight", required=False),
        )
        return holding is not None

    def _delete_holding(self, params: Params) -> bool:
        return self._ledger.delete_holding(_int(params, "holding_id"))

    def _toggle_visibility(self, params: Params) -> bool:
        return self._ledger.toggle_holding_visibility(_int(params, "holding_id")) is not None

    def _add_transaction(self, params: Params) -> bool:
        try:
            txn_date = parse_trade_date(_text(params, "date"))
        except (ValueError, OverflowError):
            raise ValidationError(f"date is not a valid date: {_text(params, 'date')!r}")
        txn = self._ledger.add_transaction(
            code=_text(params, "code"),
            txn_type=_text(params, "type"),
            txn_date=txn_date,
            quantity=_decimal(params, "quantity"),
            gross_value=_decimal(params, "value"),
            fee=_decimal(params, "fee", required=False) or Decimal("0"),
        )
        return txn is not None

    def _delete_transaction(self, params: Params) -> bool:
        return self._ledger.delete_transaction(_int(params, "transaction_id"))
