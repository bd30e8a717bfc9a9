"""Repository protocol definitions (interfaces)."""

from typing import Callable

from papertrade.repositories.protocols.account_repo import AccountRepository
from papertrade.repositories.protocols.position_repo import PositionRepository
from papertrade.repositories.protocols.transaction_repo import TransactionRepository
from papertrade.repositories.protocols.copy_trade_repo import CopyTradeRepository
from papertrade.repositories.protocols.social_repo import SocialRepository
from papertrade.repositories.protocols.unit_of_work import UnitOfWork

UnitOfWorkFactory = Callable[[], UnitOfWork]

__all__ = [
    "AccountRepository",
    "PositionRepository",
    "TransactionRepository",
    "CopyTradeRepository",
    "SocialRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
