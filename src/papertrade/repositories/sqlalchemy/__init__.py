"""SQLAlchemy repository implementations."""

from papertrade.repositories.sqlalchemy.database import (
    build_engine,
    build_session_factory,
    get_engine,
    get_session_factory,
    init_db,
    reset_database,
    Base,
)
from papertrade.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from papertrade.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from papertrade.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from papertrade.repositories.sqlalchemy.copy_trade_repo import SqlAlchemyCopyTradeRepository
from papertrade.repositories.sqlalchemy.social_repo import SqlAlchemySocialRepository
from papertrade.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "build_engine",
    "build_session_factory",
    "get_engine",
    "get_session_factory",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyPositionRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyCopyTradeRepository",
    "SqlAlchemySocialRepository",
    "SqlAlchemyUnitOfWork",
]
