"""Repository layer - data access abstractions and implementations."""

from stonks.repositories.protocols import (
    HoldingRepository,
    TransactionRepository,
    SettingsRepository,
)

__all__ = [
    "HoldingRepository",
    "TransactionRepository",
    "SettingsRepository",
]
