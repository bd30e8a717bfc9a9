"""Position repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import Position


class PositionRepository(Protocol):
    """Interface for position data access."""

    def get(self, account_id: str, symbol: str) -> Optional[Position]:
        """Get the position for one symbol, or None."""
        ...

    def list_by_account(self, account_id: str) -> list[Position]:
        """List all open positions for an account."""
        ...

    def upsert(self, position: Position) -> Position:
        """Insert or update a position."""
        ...

    def delete(self, account_id: str, symbol: str) -> None:
        """Remove a position."""
        ...
