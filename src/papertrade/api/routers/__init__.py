"""API routers package."""

from papertrade.api.routers.accounts import router as accounts_router
from papertrade.api.routers.trades import router as trades_router
from papertrade.api.routers.social import router as social_router
from papertrade.api.routers.copy_trading import router as copy_trading_router
from papertrade.api.routers.leaderboard import router as leaderboard_router

__all__ = [
    "accounts_router",
    "trades_router",
    "social_router",
    "copy_trading_router",
    "leaderboard_router",
]
