"""Pydantic schemas for trade endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from papertrade.domain.models.enums import TradeSide


class TradeCreateRequest(BaseModel):
    """Request schema for placing a trade."""

    symbol: str = Field(..., min_length=1, max_length=10, description="Stock symbol")
    shares: Decimal = Field(..., gt=0, description="Number of shares")
    side: TradeSide = Field(..., description="BUY or SELL")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("side", mode="before")
    @classmethod
    def uppercase_side(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    txn_id: str
    account_id: str
    symbol: str
    shares: Decimal
    price: Decimal
    side: TradeSide
    total: Decimal
    timestamp: datetime


class PositionResponse(BaseModel):
    """Response schema for a single position."""

    model_config = {"from_attributes": True}

    symbol: str
    shares: Decimal
    average_price: Decimal
    cost_basis: Decimal
    last_updated: Optional[datetime] = None


class PortfolioResponse(BaseModel):
    """Response schema for an account's holdings."""

    account_id: str
    cash_balance: Decimal
    positions: list[PositionResponse]
