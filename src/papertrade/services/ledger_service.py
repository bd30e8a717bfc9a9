"""Ledger: authoritative cash and position state per account."""

from decimal import Decimal
from typing import Optional

from papertrade.core.timezone import now_eastern
from papertrade.core.money import ZERO, to_cents
from papertrade.core.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InsufficientSharesError,
)
from papertrade.domain.models import Account, Position
from papertrade.repositories.protocols import AccountRepository, PositionRepository


class LedgerService:
    """
    Mutation primitives over balances and positions.

    The ledger never commits. It runs inside a caller-owned unit of work so
    that balance, position and the transaction record land together or not
    at all; any exception raised here leaves the scope to be rolled back.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        position_repo: PositionRepository,
    ):
        self._account_repo = account_repo
        self._position_repo = position_repo

    def debit(self, account_id: str, amount: Decimal) -> Account:
        """Remove ``amount`` from the cash balance; never below zero."""
        account = self._require_account(account_id)
        if amount > account.cash_balance:
            raise InsufficientFundsError(str(amount), str(account.cash_balance))
        return self._account_repo.adjust_balance(account_id, -amount)

    def credit(self, account_id: str, amount: Decimal) -> Account:
        """Add ``amount`` to the cash balance."""
        self._require_account(account_id)
        return self._account_repo.adjust_balance(account_id, amount)

    def apply_buy(
        self,
        account_id: str,
        symbol: str,
        shares: Decimal,
        price: Decimal,
    ) -> Position:
        """
        Open or grow a position and pay for it.

        A merge sets ``average_price`` to the plain mean of the old average
        and the new price, regardless of share counts.
        """
        position = self._position_repo.get(account_id, symbol)
        now = now_eastern()

        if position is None:
            updated = Position(
                account_id=account_id,
                symbol=symbol,
                shares=shares,
                average_price=price,
                last_updated=now,
            )
        else:
            updated = Position(
                account_id=account_id,
                symbol=symbol,
                shares=position.shares + shares,
                average_price=to_cents((position.average_price + price) / 2),
                last_updated=now,
            )

        self.debit(account_id, to_cents(shares * price))
        return self._position_repo.upsert(updated)

    def apply_sell(
        self,
        account_id: str,
        symbol: str,
        shares: Decimal,
        price: Decimal,
    ) -> Optional[Position]:
        """
        Shrink a position and collect the proceeds.

        Returns the remaining position, or None when the sell closed it.
        """
        position = self._position_repo.get(account_id, symbol)
        available = position.shares if position else ZERO
        if position is None or available < shares:
            raise InsufficientSharesError(symbol, str(shares), str(available))

        remaining = position.shares - shares
        if remaining == ZERO:
            self._position_repo.delete(account_id, symbol)
            result = None
        else:
            result = self._position_repo.upsert(
                Position(
                    account_id=account_id,
                    symbol=symbol,
                    shares=remaining,
                    average_price=position.average_price,
                    last_updated=now_eastern(),
                )
            )

        self.credit(account_id, to_cents(shares * price))
        return result

    def _require_account(self, account_id: str) -> Account:
        account = self._account_repo.get_by_id(account_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return account
