"""SQLAlchemy unit of work: one session, one atomic scope."""

from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from papertrade.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from papertrade.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from papertrade.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from papertrade.repositories.sqlalchemy.copy_trade_repo import SqlAlchemyCopyTradeRepository
from papertrade.repositories.sqlalchemy.social_repo import SqlAlchemySocialRepository


class SqlAlchemyUnitOfWork:
    """
    Opens a fresh session on enter and exposes every repository bound to it.

    Repositories only flush; nothing is durable until ``commit()``. Exiting
    without a commit rolls the session back. Each instance is single-use and
    must stay on the thread that entered it.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._session: Optional[Session] = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.accounts = SqlAlchemyAccountRepository(self._session)
        self.positions = SqlAlchemyPositionRepository(self._session)
        self.transactions = SqlAlchemyTransactionRepository(self._session)
        self.copy_trades = SqlAlchemyCopyTradeRepository(self._session)
        self.social = SqlAlchemySocialRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()
            self._session = None

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
