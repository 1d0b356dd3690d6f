"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    BUY = "buy"
    SELL = "sell"


class RebalanceAction(str, Enum):
    """Suggested action for one holding in a rebalance plan."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class SettingKey(str, Enum):
    """Keys of the portfolio_settings key/value table."""

    CASH_AMOUNT = "cash_amount"
    PORTFOLIO_NAME = "portfolio_name"
