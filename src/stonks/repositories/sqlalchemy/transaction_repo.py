"""SQLAlchemy implementation of TransactionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from stonks.domain.models import Transaction
from stonks.repositories.sqlalchemy.database import persistence_guard
from stonks.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        with persistence_guard(self._db, "create transaction"):
            orm_txn = TransactionORM(
                code=transaction.code,
                txn_type=transaction.txn_type,
                txn_date=transaction.txn_date,
                quantity=transaction.quantity,
                gross_value=transaction.gross_value,
                fee=transaction.fee,
            )
            if transaction.created_at is not None:
                orm_txn.created_at = transaction.created_at
            self._db.add(orm_txn)
            self._db.commit()
            self._db.refresh(orm_txn)
            return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        with persistence_guard(self._db, "get transaction"):
            orm_txn = self._db.get(TransactionORM, txn_id)
            return self._to_domain(orm_txn) if orm_txn else None

    def delete(self, txn_id: int) -> bool:
        """Hard delete a transaction."""
        with persistence_guard(self._db, "delete transaction"):
            deleted = self._db.query(TransactionORM).filter(
                TransactionORM.id == txn_id
            ).delete()
            self._db.commit()
            return deleted > 0

    def list_all(self) -> list[Transaction]:
        """List all transactions ordered by date then id."""
        with persistence_guard(self._db, "list transactions"):
            rows = (
                self._db.query(TransactionORM)
                .order_by(TransactionORM.txn_date, TransactionORM.id)
                .all()
            )
            return [self._to_domain(t) for t in rows]

    def list_by_code(self, code: str) -> list[Transaction]:
        """List transactions for one code ordered by date then id."""
        with persistence_guard(self._db, "list transactions by code"):
            rows = (
                self._db.query(TransactionORM)
                .filter(TransactionORM.code == code)
                .order_by(TransactionORM.txn_date, TransactionORM.id)
                .all()
            )
            return [self._to_domain(t) for t in rows]

    def distinct_codes(self) -> list[str]:
        """All codes with at least one transaction, sorted."""
        with persistence_guard(self._db, "list transaction codes"):
            rows = (
                self._db.query(TransactionORM.code)
                .distinct()
                .order_by(TransactionORM.code)
                .all()
            )
            return [row[0] for row in rows]

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM transaction to domain model."""
        return Transaction(
            id=orm.id,
            code=orm.code,
            txn_type=orm.txn_type,
            txn_date=orm.txn_date,
            quantity=Decimal(str(orm.quantity)),
            gross_value=Decimal(str(orm.gross_value)),
            fee=Decimal(str(orm.fee)) if orm.fee is not None else Decimal("0"),
            created_at=orm.created_at,
        )
