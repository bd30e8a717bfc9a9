"""Social graph and subscription domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.domain.models.enums import SubscriptionStatus


@dataclass
class FollowEdge:
    """Follower -> followed edge, independent of subscriptions and copy settings."""

    follower_account_id: str
    followed_account_id: str
    created_at: Optional[datetime] = field(default=None)


@dataclass
class Subscription:
    """Paid subscription from one account to a trader (fee recorded, never charged)."""

    subscription_id: str
    subscriber_account_id: str
    trader_account_id: str
    monthly_fee: Decimal
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    started_at: Optional[datetime] = field(default=None)
    cancelled_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = SubscriptionStatus(self.status)
