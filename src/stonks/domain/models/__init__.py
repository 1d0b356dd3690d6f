"""Domain models package."""

from stonks.domain.models.enums import TransactionType, RebalanceAction, SettingKey
from stonks.domain.models.holding import Holding
from stonks.domain.models.transaction import Transaction
from stonks.domain.models.cache import CacheEntry

__all__ = [
    "TransactionType",
    "RebalanceAction",
    "SettingKey",
    "Holding",
    "Transaction",
    "CacheEntry",
]
