"""Pydantic schemas for account and trader endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Request schema for creating an account."""

    username: str = Field(..., min_length=1, max_length=255, description="Unique username")


class TraderProfileUpdateRequest(BaseModel):
    """Request schema for updating the trader profile (partial update)."""

    is_trader: Optional[bool] = None
    subscription_fee: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Monthly subscription fee charged to subscribers",
    )
    bio: Optional[str] = Field(default=None, max_length=1000)


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    username: str
    cash_balance: Decimal
    is_trader: bool
    subscription_fee: Decimal
    bio: Optional[str] = None
    created_at: Optional[datetime] = None


class TraderResponse(BaseModel):
    """Public view of a trader (no balance)."""

    model_config = {"from_attributes": True}

    account_id: str
    username: str
    subscription_fee: Decimal
    bio: Optional[str] = None


class LeaderboardEntryResponse(BaseModel):
    """Response schema for one leaderboard row."""

    model_config = {"from_attributes": True}

    account_id: str
    username: str
    total_value: Decimal
