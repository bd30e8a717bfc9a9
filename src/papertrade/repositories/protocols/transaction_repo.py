"""Transaction repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for the append-only transaction log."""

    def append(self, transaction: Transaction) -> Transaction:
        """Append a transaction."""
        ...

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def list_by_account(self, account_id: str) -> list[Transaction]:
        """List transactions for an account, oldest first."""
        ...
