"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Account:
    """
    Paper trading account.

    Holds the virtual cash balance. An account that opts in as a trader
    can be followed, subscribed to and copy-traded by other accounts.
    """

    account_id: str
    username: str
    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    is_trader: bool = False
    subscription_fee: Decimal = field(default_factory=lambda: Decimal("0"))
    bio: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
