"""Transaction domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from papertrade.core.money import to_cents
from papertrade.domain.models.enums import TradeSide


@dataclass(frozen=True)
class Transaction:
    """
    Executed trade (append-only ledger entry).

    Never mutated after creation.
    """

    txn_id: str
    account_id: str
    symbol: str
    shares: Decimal
    price: Decimal
    side: TradeSide
    timestamp: datetime

    @property
    def total(self) -> Decimal:
        """Cash value of the trade, in cents."""
        return to_cents(self.shares * self.price)
