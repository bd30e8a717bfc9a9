"""Pydantic schemas for copy trading endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from papertrade.domain.models.enums import CopyTradeStatus, RiskLevel


class CopySettingCreateRequest(BaseModel):
    """Request schema for creating a copy setting."""

    followed_trader_id: str = Field(..., min_length=1)
    copy_amount_cash: Decimal = Field(..., gt=0, description="Cash to commit per copied trade")
    max_position_size_cash: Decimal = Field(..., gt=0, description="Cap on a single copied trade")
    risk_level: RiskLevel = RiskLevel.MEDIUM
    enabled: bool = True


class CopySettingUpdateRequest(BaseModel):
    """Request schema for updating a copy setting (partial update)."""

    copy_amount_cash: Optional[Decimal] = Field(default=None, gt=0)
    max_position_size_cash: Optional[Decimal] = Field(default=None, gt=0)
    risk_level: Optional[RiskLevel] = None
    enabled: Optional[bool] = None


class CopySettingResponse(BaseModel):
    """Response schema for a copy setting."""

    model_config = {"from_attributes": True}

    setting_id: str
    follower_account_id: str
    followed_trader_id: str
    enabled: bool
    copy_amount_cash: Decimal
    max_position_size_cash: Decimal
    risk_level: RiskLevel
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CopiedTradeResponse(BaseModel):
    """Response schema for one copy trade outcome."""

    model_config = {"from_attributes": True}

    copied_trade_id: str
    original_txn_id: str
    follower_account_id: str
    setting_id: Optional[str] = None
    status: CopyTradeStatus
    copied_shares: Decimal
    copied_price: Decimal
    follower_txn_id: Optional[str] = None
    error: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
