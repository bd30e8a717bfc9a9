"""View models for service outputs."""

from papertrade.domain.views.portfolio import (
    TradeRequest,
    PortfolioView,
    LeaderboardEntry,
    FanoutOutcome,
    FanoutReport,
    TradeResult,
)

__all__ = [
    "TradeRequest",
    "PortfolioView",
    "LeaderboardEntry",
    "FanoutOutcome",
    "FanoutReport",
    "TradeResult",
]
