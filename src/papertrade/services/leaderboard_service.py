"""Leaderboard of accounts by total portfolio value."""

import logging
from decimal import Decimal
from typing import Optional

from papertrade.core.money import to_cents
from papertrade.domain.views import LeaderboardEntry
from papertrade.providers.price_oracle import PriceOracle
from papertrade.repositories.protocols import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Ranks accounts by cash plus positions valued at the oracle price.

    Falls back to a position's average price when the oracle cannot quote
    its symbol.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, price_oracle: PriceOracle):
        self._uow_factory = uow_factory
        self._oracle = price_oracle

    def get_leaderboard(self, limit: int = 10) -> list[LeaderboardEntry]:
        """Top ``limit`` accounts, highest total value first."""
        with self._uow_factory() as uow:
            accounts = uow.accounts.list_all()
            holdings = {a.account_id: uow.positions.list_by_account(a.account_id) for a in accounts}

        prices: dict[str, Decimal] = {}
        entries = []
        for account in accounts:
            total = account.cash_balance
            for position in holdings[account.account_id]:
                if position.symbol not in prices:
                    prices[position.symbol] = self._price_or_none(position.symbol)
                price = prices[position.symbol] or position.average_price
                total += position.shares * price
            entries.append(
                LeaderboardEntry(
                    account_id=account.account_id,
                    username=account.username,
                    total_value=to_cents(total),
                )
            )

        entries.sort(key=lambda e: (-e.total_value, e.username))
        return entries[:limit]

    def _price_or_none(self, symbol: str) -> Optional[Decimal]:
        try:
            return self._oracle.quote(symbol)
        except Exception as exc:
            # Graceful degradation: value at cost
            logger.warning("No quote for %s, valuing at average price: %s", symbol, exc)
            return None
