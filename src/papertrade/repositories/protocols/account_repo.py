"""Account repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from papertrade.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def get_by_username(self, username: str) -> Optional[Account]:
        """Retrieve account by username."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts."""
        ...

    def list_traders(self) -> list[Account]:
        """List accounts that opted in as traders."""
        ...

    def update_profile(self, account: Account) -> Account:
        """Persist trader profile fields (is_trader, subscription_fee, bio)."""
        ...

    def adjust_balance(self, account_id: str, delta: Decimal) -> Account:
        """Add ``delta`` (may be negative) to the cash balance."""
        ...
