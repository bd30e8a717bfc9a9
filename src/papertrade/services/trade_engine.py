"""Transaction engine: executes one trade end-to-end."""

import logging
import re
import threading
import time
import uuid
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from decimal import Decimal, InvalidOperation
from typing import Optional

from papertrade.core.timezone import now_eastern
from papertrade.core.money import to_cents, to_shares
from papertrade.core.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidTradeError,
    TradeTimeoutError,
)
from papertrade.domain.models import Transaction, TradeSide
from papertrade.domain.views import PortfolioView, TradeRequest
from papertrade.providers.price_oracle import PriceOracle
from papertrade.repositories.protocols import UnitOfWorkFactory
from papertrade.services.ledger_service import LedgerService
from papertrade.services.locks import AccountLockRegistry, get_lock_registry

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"^[A-Z][A-Z0-9.\-]{0,9}$")
QUOTE_WORKERS = 8


class TradeEngine:
    """
    Executes trades against the ledger.

    The price is quoted first, then the trade holds its account's lock and
    runs in its own unit of work: account lookup, funds check, ledger update
    and transaction append commit together. Failures are final; nothing is
    retried.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        price_oracle: PriceOracle,
        lock_registry: Optional[AccountLockRegistry] = None,
        quote_pool: Optional[ThreadPoolExecutor] = None,
    ):
        self._uow_factory = uow_factory
        self._oracle = price_oracle
        self._locks = lock_registry if lock_registry is not None else get_lock_registry()
        self._quote_pool = quote_pool or get_quote_pool()

    def execute(
        self,
        account_id: str,
        request: TradeRequest,
        deadline: Optional[float] = None,
    ) -> Transaction:
        """
        Execute a buy or sell for ``account_id`` at the oracle's price.

        ``deadline`` is a ``time.monotonic()`` value; if given, the trade is
        abandoned (rolled back, TradeTimeoutError) when the quote, the account
        lock or the commit cannot happen before it.
        """
        symbol, shares, side = self._validate(request)
        price = self._quote(symbol, account_id, deadline)

        with self._locks.hold(account_id, timeout=_remaining(deadline)):
            with self._uow_factory() as uow:
                account = uow.accounts.get_by_id(account_id)
                if not account:
                    raise AccountNotFoundError(account_id)

                total = to_cents(shares * price)

                if side == TradeSide.BUY and total > account.cash_balance:
                    raise InsufficientFundsError(str(total), str(account.cash_balance))

                ledger = LedgerService(uow.accounts, uow.positions)
                if side == TradeSide.BUY:
                    ledger.apply_buy(account_id, symbol, shares, price)
                else:
                    ledger.apply_sell(account_id, symbol, shares, price)

                transaction = uow.transactions.append(
                    Transaction(
                        txn_id=str(uuid.uuid4()),
                        account_id=account_id,
                        symbol=symbol,
                        shares=shares,
                        price=price,
                        side=side,
                        timestamp=now_eastern(),
                    )
                )

                if deadline is not None and time.monotonic() > deadline:
                    raise TradeTimeoutError(account_id)
                uow.commit()

        logger.info(
            "Executed %s %s %s @ %s for account %s (txn %s)",
            side.value, shares, symbol, price, account_id, transaction.txn_id,
        )
        return transaction

    def list_transactions(self, account_id: str) -> list[Transaction]:
        """Trade history for an account, oldest first."""
        with self._uow_factory() as uow:
            if not uow.accounts.get_by_id(account_id):
                raise AccountNotFoundError(account_id)
            return uow.transactions.list_by_account(account_id)

    def get_portfolio(self, account_id: str) -> PortfolioView:
        """Cash balance and open positions for an account."""
        with self._uow_factory() as uow:
            account = uow.accounts.get_by_id(account_id)
            if not account:
                raise AccountNotFoundError(account_id)
            return PortfolioView(
                account_id=account_id,
                cash_balance=account.cash_balance,
                positions=uow.positions.list_by_account(account_id),
            )

    def _quote(self, symbol: str, account_id: str, deadline: Optional[float]) -> Decimal:
        if deadline is None:
            price = self._oracle.quote(symbol)
        else:
            remaining = _remaining(deadline)
            if remaining <= 0:
                raise TradeTimeoutError(account_id)
            # A stalled oracle keeps its worker thread; the trade gives up at the deadline
            fut = self._quote_pool.submit(self._oracle.quote, symbol)
            try:
                price = fut.result(timeout=remaining)
            except FuturesTimeoutError:
                fut.cancel()
                logger.warning("Quote for %s exceeded the deadline of account %s", symbol, account_id)
                raise TradeTimeoutError(account_id) from None
        if price is None or price <= 0:
            raise InvalidTradeError(f"Oracle returned a non-positive price for {symbol}: {price}")
        return to_cents(price)

    @staticmethod
    def _validate(request: TradeRequest) -> tuple[str, Decimal, TradeSide]:
        symbol = (request.symbol or "").strip().upper()
        if not SYMBOL_PATTERN.match(symbol):
            raise InvalidTradeError(f"Invalid symbol: {request.symbol!r}")

        try:
            side = TradeSide(request.side)
        except ValueError:
            raise InvalidTradeError(f"Invalid side: {request.side!r}") from None

        try:
            shares = Decimal(str(request.shares))
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidTradeError(f"Invalid share quantity: {request.shares!r}") from None
        if not shares.is_finite() or shares <= 0:
            raise InvalidTradeError(f"Shares must be positive, got {request.shares}")
        shares = to_shares(shares)
        if shares <= 0:
            raise InvalidTradeError(f"Share quantity {request.shares} rounds to zero")

        return symbol, shares, side


def _remaining(deadline: Optional[float]) -> Optional[float]:
    if deadline is None:
        return None
    return deadline - time.monotonic()


# Process-wide pool for deadline-bounded quotes
_quote_pool: Optional[ThreadPoolExecutor] = None
_quote_pool_guard = threading.Lock()


def get_quote_pool() -> ThreadPoolExecutor:
    """Return the process-wide quote pool."""
    global _quote_pool
    with _quote_pool_guard:
        if _quote_pool is None:
            _quote_pool = ThreadPoolExecutor(max_workers=QUOTE_WORKERS, thread_name_prefix="quote")
        return _quote_pool
