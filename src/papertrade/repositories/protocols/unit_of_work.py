"""Unit of work protocol."""

from typing import Protocol

from papertrade.repositories.protocols.account_repo import AccountRepository
from papertrade.repositories.protocols.position_repo import PositionRepository
from papertrade.repositories.protocols.transaction_repo import TransactionRepository
from papertrade.repositories.protocols.copy_trade_repo import CopyTradeRepository
from papertrade.repositories.protocols.social_repo import SocialRepository


class UnitOfWork(Protocol):
    """
    One atomic scope over all repositories.

    Used as a context manager. Changes made through the repositories become
    visible only after ``commit()``; leaving the block without committing
    (or with an exception) rolls everything back.
    """

    accounts: AccountRepository
    positions: PositionRepository
    transactions: TransactionRepository
    copy_trades: CopyTradeRepository
    social: SocialRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def commit(self) -> None:
        """Commit all changes made in this scope."""
        ...

    def rollback(self) -> None:
        """Discard all changes made in this scope."""
        ...
