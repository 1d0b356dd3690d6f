"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    A tracked instrument row.

    Holdings are never created implicitly by transactions; they are added,
    edited, deleted and shown/hidden explicitly. ``code`` is exchange
    qualified (``EXCHANGE:SYMBOL``).
    """

    id: Optional[int]
    name: str
    code: str
    target_weight: Optional[Decimal] = None
    visible: bool = True
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    @property
    def exchange(self) -> Optional[str]:
        """Exchange prefix of the code, or None for a bare symbol."""
        if ":" not in self.code:
            return None
        return self.code.split(":", 1)[0]
