"""Enumerations for domain models."""

from enum import Enum


class TradeSide(str, Enum):
    """Direction of a trade."""

    BUY = "BUY"
    SELL = "SELL"


class CopyTradeStatus(str, Enum):
    """Lifecycle of one fanout attempt."""

    PENDING = "PENDING"
    EXECUTED = "EXECUTED"
    FAILED = "FAILED"


class RiskLevel(str, Enum):
    """Follower-declared risk appetite for a copy setting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SubscriptionStatus(str, Enum):
    """Subscription states."""

    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
