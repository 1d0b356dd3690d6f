"""Holding repository protocol."""

from typing import Protocol, Optional

from stonks.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding row access."""

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding; returns it with its assigned id."""
        ...

    def get_by_id(self, holding_id: int) -> Optional[Holding]:
        """Retrieve holding by ID."""
        ...

    def list_all(self) -> list[Holding]:
        """List all holdings ordered by id."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Update name, code, target weight and visibility of a holding."""
        ...

    def delete(self, holding_id: int) -> bool:
        """Delete a holding; False when no row matched."""
        ...
