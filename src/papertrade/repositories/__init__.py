"""Repository layer - data access abstractions and implementations."""

from papertrade.repositories.protocols import (
    AccountRepository,
    PositionRepository,
    TransactionRepository,
    CopyTradeRepository,
    SocialRepository,
    UnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "AccountRepository",
    "PositionRepository",
    "TransactionRepository",
    "CopyTradeRepository",
    "SocialRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
