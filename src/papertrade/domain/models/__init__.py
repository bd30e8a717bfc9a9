"""Domain models package."""

from papertrade.domain.models.enums import (
    TradeSide,
    CopyTradeStatus,
    RiskLevel,
    SubscriptionStatus,
)
from papertrade.domain.models.account import Account
from papertrade.domain.models.position import Position
from papertrade.domain.models.transaction import Transaction
from papertrade.domain.models.copy_trading import CopySetting, CopiedTrade
from papertrade.domain.models.social import FollowEdge, Subscription

__all__ = [
    "TradeSide",
    "CopyTradeStatus",
    "RiskLevel",
    "SubscriptionStatus",
    "Account",
    "Position",
    "Transaction",
    "CopySetting",
    "CopiedTrade",
    "FollowEdge",
    "Subscription",
]
