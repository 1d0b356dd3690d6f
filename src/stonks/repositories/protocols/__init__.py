"""Repository protocol definitions (interfaces)."""

from stonks.repositories.protocols.holding_repo import HoldingRepository
from stonks.repositories.protocols.transaction_repo import TransactionRepository
from stonks.repositories.protocols.settings_repo import SettingsRepository

__all__ = [
    "HoldingRepository",
    "TransactionRepository",
    "SettingsRepository",
]
