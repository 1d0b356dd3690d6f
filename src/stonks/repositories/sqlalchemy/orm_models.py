"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Boolean,
    Text,
    Numeric,
    Enum as SqlEnum,
)

from stonks.repositories.sqlalchemy.database import Base
from stonks.domain.models.enums import TransactionType


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "portfolio_holdings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    code = Column(String(64), nullable=False, index=True)
    target_weight = Column(Numeric(precision=9, scale=4), nullable=True)
    visible = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64), nullable=False, index=True)
    txn_type = Column(
        SqlEnum(TransactionType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    txn_date = Column(Date, nullable=False)
    quantity = Column(Numeric(precision=18, scale=8), nullable=False)
    gross_value = Column(Numeric(precision=18, scale=4), nullable=False)
    fee = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class SettingORM(Base):
    """SQLAlchemy model for a portfolio setting (key/value)."""

    __tablename__ = "portfolio_settings"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime, nullable=True, default=datetime.utcnow, onupdate=datetime.utcnow)
