"""Domain layer - pure business models with no external dependencies."""

from papertrade.domain.models import (
    Account,
    Position,
    Transaction,
    CopySetting,
    CopiedTrade,
    FollowEdge,
    Subscription,
    TradeSide,
    CopyTradeStatus,
    RiskLevel,
    SubscriptionStatus,
)

__all__ = [
    "Account",
    "Position",
    "Transaction",
    "CopySetting",
    "CopiedTrade",
    "FollowEdge",
    "Subscription",
    "TradeSide",
    "CopyTradeStatus",
    "RiskLevel",
    "SubscriptionStatus",
]
