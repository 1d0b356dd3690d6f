"""Core utilities and shared functionality."""

from stonks.core.timezone import (
    now_eastern,
    to_eastern,
    now_millis,
    parse_trade_date,
    EASTERN_TZ,
)
from stonks.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    ExternalFetchError,
    UnknownActionError,
)
from stonks.core.degrade import degrade_on_persistence_error

__all__ = [
    "now_eastern",
    "to_eastern",
    "now_millis",
    "parse_trade_date",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "ExternalFetchError",
    "UnknownActionError",
    "degrade_on_persistence_error",
]
