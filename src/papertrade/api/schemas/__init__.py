"""Pydantic schemas for API request/response."""

from papertrade.api.schemas.account import (
    AccountCreate,
    TraderProfileUpdateRequest,
    AccountResponse,
    TraderResponse,
    LeaderboardEntryResponse,
)
from papertrade.api.schemas.trade import (
    TradeCreateRequest,
    TransactionResponse,
    PositionResponse,
    PortfolioResponse,
)
from papertrade.api.schemas.social import (
    FollowResponse,
    SubscriptionCreateRequest,
    SubscriptionResponse,
)
from papertrade.api.schemas.copy_trading import (
    CopySettingCreateRequest,
    CopySettingUpdateRequest,
    CopySettingResponse,
    CopiedTradeResponse,
)

__all__ = [
    "AccountCreate",
    "TraderProfileUpdateRequest",
    "AccountResponse",
    "TraderResponse",
    "LeaderboardEntryResponse",
    "TradeCreateRequest",
    "TransactionResponse",
    "PositionResponse",
    "PortfolioResponse",
    "FollowResponse",
    "SubscriptionCreateRequest",
    "SubscriptionResponse",
    "CopySettingCreateRequest",
    "CopySettingUpdateRequest",
    "CopySettingResponse",
    "CopiedTradeResponse",
]
