"""SQLAlchemy implementation of SettingsRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from stonks.repositories.sqlalchemy.database import persistence_guard
from stonks.repositories.sqlalchemy.orm_models import SettingORM


class SqlAlchemySettingsRepository:
    """SQLAlchemy-backed key/value settings repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, key: str) -> Optional[str]:
        """Return the raw stored value for key, or None."""
        with persistence_guard(self._db, f"get setting {key}"):
            row = self._db.get(SettingORM, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite a setting."""
        self.set_many({key: value})

    def set_many(self, values: dict[str, str]) -> None:
        """Insert or overwrite several settings in a single commit."""
        with persistence_guard(self._db, f"set settings {', '.join(values)}"):
            for key, value in values.items():
                row = self._db.get(SettingORM, key)
                if row:
                    row.value = value
                else:
                    self._db.add(SettingORM(key=key, value=value))
            self._db.commit()
