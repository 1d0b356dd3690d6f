"""Transaction repository protocol."""

from typing import Protocol, Optional

from stonks.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access. Append/delete only."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def delete(self, txn_id: int) -> bool:
        """Hard delete a transaction; False when no row matched."""
        ...

    def list_all(self) -> list[Transaction]:
        """List all transactions ordered by date then id."""
        ...

    def list_by_code(self, code: str) -> list[Transaction]:
        """List transactions for one code ordered by date then id."""
        ...

    def distinct_codes(self) -> list[str]:
        """All codes that have at least one transaction."""
        ...
