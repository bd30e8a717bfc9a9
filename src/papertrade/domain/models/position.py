"""Position domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.core.money import to_cents


@dataclass
class Position:
    """
    Holding of one symbol in one account.

    Exists only while shares > 0; the ledger deletes it when a sell
    takes shares to exactly zero.
    """

    account_id: str
    symbol: str
    shares: Decimal
    average_price: Decimal
    last_updated: Optional[datetime] = field(default=None)

    @property
    def cost_basis(self) -> Decimal:
        return to_cents(self.shares * self.average_price)
