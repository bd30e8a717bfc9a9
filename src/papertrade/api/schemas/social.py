"""Pydantic schemas for follow and subscription endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from papertrade.domain.models.enums import SubscriptionStatus


class FollowResponse(BaseModel):
    """Response schema for a follow edge."""

    model_config = {"from_attributes": True}

    follower_account_id: str
    followed_account_id: str
    created_at: Optional[datetime] = None


class SubscriptionCreateRequest(BaseModel):
    """Request schema for subscribing to a trader."""

    trader_id: str = Field(..., min_length=1, description="Trader account ID")


class SubscriptionResponse(BaseModel):
    """Response schema for a subscription."""

    model_config = {"from_attributes": True}

    subscription_id: str
    subscriber_account_id: str
    trader_account_id: str
    monthly_fee: Decimal
    status: SubscriptionStatus
    started_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
