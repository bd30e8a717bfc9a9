"""View models for service outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from papertrade.domain.models import CopyTradeStatus, Position, TradeSide, Transaction


@dataclass
class TradeRequest:
    """A request to buy or sell shares of one symbol."""

    symbol: str
    shares: Decimal
    side: TradeSide


@dataclass
class PortfolioView:
    """Cash balance plus open positions for one account."""

    account_id: str
    cash_balance: Decimal
    positions: list[Position] = field(default_factory=list)


@dataclass
class LeaderboardEntry:
    """One row of the leaderboard."""

    account_id: str
    username: str
    total_value: Decimal


@dataclass
class FanoutOutcome:
    """Result of one follower's copy attempt."""

    follower_account_id: str
    copied_trade_id: str
    status: CopyTradeStatus
    error: Optional[str] = None


@dataclass
class FanoutReport:
    """Per-follower outcomes of one fanout run."""

    original_txn_id: str
    outcomes: list[FanoutOutcome] = field(default_factory=list)

    @property
    def executed_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == CopyTradeStatus.EXECUTED)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == CopyTradeStatus.FAILED)


@dataclass
class TradeResult:
    """The acting account's own transaction and, when run inline, its fanout."""

    transaction: Transaction
    fanout: Optional[FanoutReport] = None
