"""Service layer - business logic orchestration."""

from papertrade.services.locks import AccountLockRegistry, get_lock_registry
from papertrade.services.ledger_service import LedgerService
from papertrade.services.trade_engine import TradeEngine
from papertrade.services.fanout_controller import FanoutController
from papertrade.services.trading_service import TradingService
from papertrade.services.account_service import AccountService, TraderProfileUpdate
from papertrade.services.social_service import SocialService
from papertrade.services.copy_settings_service import (
    CopySettingsService,
    CopySettingCreate,
    CopySettingUpdate,
)
from papertrade.services.leaderboard_service import LeaderboardService

__all__ = [
    "AccountLockRegistry",
    "get_lock_registry",
    "LedgerService",
    "TradeEngine",
    "FanoutController",
    "TradingService",
    "AccountService",
    "TraderProfileUpdate",
    "SocialService",
    "CopySettingsService",
    "CopySettingCreate",
    "CopySettingUpdate",
    "LeaderboardService",
]
