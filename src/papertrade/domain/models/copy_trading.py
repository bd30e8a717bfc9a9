"""Copy trading domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.domain.models.enums import CopyTradeStatus, RiskLevel


@dataclass
class CopySetting:
    """
    A follower's configuration for replicating one trader's trades.

    Owned and mutated only by the follower; read-only to the fanout.
    """

    setting_id: str
    follower_account_id: str
    followed_trader_id: str
    copy_amount_cash: Decimal
    max_position_size_cash: Decimal
    enabled: bool = True
    risk_level: RiskLevel = RiskLevel.MEDIUM
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.risk_level, str):
            self.risk_level = RiskLevel(self.risk_level)


@dataclass
class CopiedTrade:
    """
    Outcome of one fanout attempt for one follower.

    Created PENDING; moved to EXECUTED or FAILED exactly once.
    """

    copied_trade_id: str
    original_txn_id: str
    follower_account_id: str
    status: CopyTradeStatus
    copied_shares: Decimal
    copied_price: Decimal
    setting_id: Optional[str] = None
    follower_txn_id: Optional[str] = None
    error: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    completed_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = CopyTradeStatus(self.status)

    @property
    def is_final(self) -> bool:
        return self.status != CopyTradeStatus.PENDING
