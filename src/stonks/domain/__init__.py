"""Domain layer - pure business models with no external dependencies."""

from stonks.domain.models import (
    Holding,
    Transaction,
    CacheEntry,
    TransactionType,
    RebalanceAction,
    SettingKey,
)

__all__ = [
    "Holding",
    "Transaction",
    "CacheEntry",
    "TransactionType",
    "RebalanceAction",
    "SettingKey",
]
