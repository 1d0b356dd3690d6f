"""SQLAlchemy repository implementations."""

from stonks.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    persistence_guard,
    Base,
)
from stonks.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from stonks.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from stonks.repositories.sqlalchemy.settings_repo import SqlAlchemySettingsRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "persistence_guard",
    "Base",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemySettingsRepository",
]
