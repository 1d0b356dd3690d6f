"""SQLAlchemy implementation of HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from stonks.core.exceptions import NotFoundError
from stonks.domain.models import Holding
from stonks.repositories.sqlalchemy.database import persistence_guard
from stonks.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        with persistence_guard(self._db, "create holding"):
            orm_holding = HoldingORM(
                name=holding.name,
                code=holding.code,
                target_weight=holding.target_weight,
                visible=holding.visible,
            )
            if holding.created_at is not None:
                orm_holding.created_at = holding.created_at
            self._db.add(orm_holding)
            self._db.commit()
            self._db.refresh(orm_holding)
            return self._to_domain(orm_holding)

    def get_by_id(self, holding_id: int) -> Optional[Holding]:
        """Retrieve holding by ID."""
        with persistence_guard(self._db, "get holding"):
            orm_holding = self._db.get(HoldingORM, holding_id)
            return self._to_domain(orm_holding) if orm_holding else None

    def list_all(self) -> list[Holding]:
        """List all holdings ordered by id."""
        with persistence_guard(self._db, "list holdings"):
            rows = self._db.query(HoldingORM).order_by(HoldingORM.id).all()
            return [self._to_domain(h) for h in rows]

    def update(self, holding: Holding) -> Holding:
        """Update an existing holding."""
        with persistence_guard(self._db, "update holding"):
            orm_holding = self._db.get(HoldingORM, holding.id)
            if not orm_holding:
                raise NotFoundError("Holding", str(holding.id))

            orm_holding.name = holding.name
            orm_holding.code = holding.code
            orm_holding.target_weight = holding.target_weight
            orm_holding.visible = holding.visible
            if holding.updated_at is not None:
                orm_holding.updated_at = holding.updated_at

            self._db.commit()
            self._db.refresh(orm_holding)
            return self._to_domain(orm_holding)

    def delete(self, holding_id: int) -> bool:
        """Delete a holding (hard delete)."""
        with persistence_guard(self._db, "delete holding"):
            deleted = self._db.query(HoldingORM).filter(
                HoldingORM.id == holding_id
            ).delete()
            self._db.commit()
            return deleted > 0

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM holding to domain model."""
        return Holding(
            id=orm.id,
            name=orm.name,
            code=orm.code,
            target_weight=Decimal(str(orm.target_weight)) if orm.target_weight is not None else None,
            visible=bool(orm.visible),
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
