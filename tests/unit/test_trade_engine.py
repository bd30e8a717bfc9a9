"""
Unit tests for TradeEngine.

Tests cover:
- Buy and sell execution at the oracle price
- Request validation (symbol, shares, side)
- Funds checks before any mutation
- Deadlines and lock timeouts
- Transaction history and portfolio views
"""

import time

import pytest
from decimal import Decimal

from papertrade.services import TradeEngine
from papertrade.domain.models import TradeSide
from papertrade.domain.views import TradeRequest
from papertrade.core.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidTradeError,
    TradeTimeoutError,
)
from tests.conftest import SlowPriceOracle, balance_of, position_of


def buy(symbol: str, shares) -> TradeRequest:
    return TradeRequest(symbol=symbol, shares=Decimal(str(shares)), side=TradeSide.BUY)


def sell(symbol: str, shares) -> TradeRequest:
    return TradeRequest(symbol=symbol, shares=Decimal(str(shares)), side=TradeSide.SELL)


# =============================================================================
# EXECUTION TESTS
# =============================================================================


class TestExecute:
    """Tests for successful trades."""

    def test_buy_at_oracle_price(self, trade_engine, uow_factory, account_factory):
        """
        GIVEN an account with $5000 and AAPL quoted at $50.00
        WHEN it buys 10 AAPL
        THEN a BUY transaction at $50.00 is returned, cash is $4500,
             and the position is 10 @ $50.00
        """
        account = account_factory()

        txn = trade_engine.execute(account.account_id, buy("AAPL", 10))

        assert txn.side == TradeSide.BUY
        assert txn.symbol == "AAPL"
        assert txn.shares == Decimal("10")
        assert txn.price == Decimal("50.00")
        assert txn.account_id == account.account_id
        assert balance_of(uow_factory, account.account_id) == Decimal("4500.00")
        position = position_of(uow_factory, account.account_id, "AAPL")
        assert position.shares == Decimal("10")
        assert position.average_price == Decimal("50.00")

    def test_lowercase_symbol_is_normalized(self, trade_engine, account_factory):
        """
        GIVEN an account
        WHEN it buys "aapl"
        THEN the transaction is recorded for "AAPL"
        """
        account = account_factory()

        txn = trade_engine.execute(account.account_id, buy("aapl", 1))

        assert txn.symbol == "AAPL"

    def test_string_side_is_accepted(self, trade_engine, account_factory):
        """
        GIVEN an account
        WHEN a request carries side "BUY" as a plain string
        THEN the trade executes as a buy
        """
        account = account_factory()

        txn = trade_engine.execute(
            account.account_id,
            TradeRequest(symbol="AAPL", shares=Decimal("1"), side="BUY"),
        )

        assert txn.side == TradeSide.BUY

    def test_round_trip_restores_balance(self, trade_engine, uow_factory, account_factory):
        """
        GIVEN an account with $5000
        WHEN it buys and then sells 10 AAPL at an unchanged price
        THEN cash is back to $5000 and no position remains
        """
        account = account_factory()

        trade_engine.execute(account.account_id, buy("AAPL", 10))
        trade_engine.execute(account.account_id, sell("AAPL", 10))

        assert balance_of(uow_factory, account.account_id) == Decimal("5000.00")
        assert position_of(uow_factory, account.account_id, "AAPL") is None

    def test_sell_at_new_price_realizes_gain(
        self, trade_engine, price_oracle, uow_factory, account_factory
    ):
        """
        GIVEN 10 AAPL bought at $50
        WHEN the price moves to $55 and 10 are sold
        THEN cash is $5050
        """
        account = account_factory()
        trade_engine.execute(account.account_id, buy("AAPL", 10))
        price_oracle.set_price("AAPL", Decimal("55.00"))

        txn = trade_engine.execute(account.account_id, sell("AAPL", 10))

        assert txn.price == Decimal("55.00")
        assert balance_of(uow_factory, account.account_id) == Decimal("5050.00")

    def test_fractional_shares_rounded_to_six_places(self, trade_engine, account_factory):
        """
        GIVEN an account
        WHEN it buys 1.23456789 shares
        THEN the recorded quantity is 1.234568
        """
        account = account_factory()

        txn = trade_engine.execute(account.account_id, buy("AAPL", "1.23456789"))

        assert txn.shares == Decimal("1.234568")

    def test_oracle_price_quantized_to_cents(
        self, trade_engine, price_oracle, account_factory
    ):
        """
        GIVEN an oracle quoting $12.345
        WHEN a trade executes
        THEN the recorded price is $12.35
        """
        account = account_factory()
        price_oracle.set_price("ODD", Decimal("12.345"))

        txn = trade_engine.execute(account.account_id, buy("ODD", 1))

        assert txn.price == Decimal("12.35")


# =============================================================================
# VALIDATION TESTS
# =============================================================================


class TestValidation:
    """Tests for rejected requests."""

    @pytest.mark.parametrize("symbol", ["", "1ABC", "AAPL!", "TOOLONGSYMBOL", "A B"])
    def test_invalid_symbol_rejected(self, trade_engine, account_factory, symbol):
        """
        GIVEN an account
        WHEN the symbol is malformed
        THEN InvalidTradeError is raised
        """
        account = account_factory()

        with pytest.raises(InvalidTradeError):
            trade_engine.execute(account.account_id, buy(symbol, 1))

    @pytest.mark.parametrize("shares", ["0", "-1", "0.0000001"])
    def test_non_positive_shares_rejected(
        self, trade_engine, uow_factory, account_factory, shares
    ):
        """
        GIVEN an account
        WHEN shares are zero, negative, or round to zero
        THEN InvalidTradeError is raised and cash is untouched
        """
        account = account_factory()

        with pytest.raises(InvalidTradeError):
            trade_engine.execute(account.account_id, buy("AAPL", shares))

        assert balance_of(uow_factory, account.account_id) == Decimal("5000.00")

    def test_invalid_side_rejected(self, trade_engine, account_factory):
        """
        GIVEN an account
        WHEN side is "HOLD"
        THEN InvalidTradeError is raised
        """
        account = account_factory()

        with pytest.raises(InvalidTradeError):
            trade_engine.execute(
                account.account_id,
                TradeRequest(symbol="AAPL", shares=Decimal("1"), side="HOLD"),
            )

    def test_unknown_account_rejected(self, trade_engine):
        """
        GIVEN no such account
        WHEN a trade is placed for it
        THEN AccountNotFoundError is raised
        """
        with pytest.raises(AccountNotFoundError):
            trade_engine.execute("no-such-account", buy("AAPL", 1))

    def test_non_positive_quote_rejected(
        self, trade_engine, price_oracle, uow_factory, account_factory
    ):
        """
        GIVEN an oracle quoting $0 for a symbol
        WHEN a trade is placed for it
        THEN InvalidTradeError is raised and nothing changes
        """
        account = account_factory()
        price_oracle.set_price("ZERO", Decimal("0"))

        with pytest.raises(InvalidTradeError):
            trade_engine.execute(account.account_id, buy("ZERO", 1))

        assert balance_of(uow_factory, account.account_id) == Decimal("5000.00")

    def test_buy_over_balance_rejected_without_record(
        self, trade_engine, uow_factory, account_factory
    ):
        """
        GIVEN an account with $100
        WHEN it buys 3 AAPL at $50
        THEN InsufficientFundsError is raised and no transaction is recorded
        """
        account = account_factory(balance=Decimal("100.00"))

        with pytest.raises(InsufficientFundsError):
            trade_engine.execute(account.account_id, buy("AAPL", 3))

        assert trade_engine.list_transactions(account.account_id) == []
        assert balance_of(uow_factory, account.account_id) == Decimal("100.00")

    def test_oversell_rejected_without_record(self, trade_engine, account_factory):
        """
        GIVEN an account holding 1 AAPL
        WHEN it sells 2
        THEN InsufficientSharesError is raised and only the buy is recorded
        """
        account = account_factory()
        trade_engine.execute(account.account_id, buy("AAPL", 1))

        with pytest.raises(InsufficientSharesError):
            trade_engine.execute(account.account_id, sell("AAPL", 2))

        assert len(trade_engine.list_transactions(account.account_id)) == 1


# =============================================================================
# DEADLINE TESTS
# =============================================================================


class TestDeadline:
    """Tests for deadline-bounded execution."""

    def test_expired_deadline_rolls_back(self, trade_engine, uow_factory, account_factory):
        """
        GIVEN a deadline already in the past
        WHEN a trade executes
        THEN TradeTimeoutError is raised and no ledger change is committed
        """
        account = account_factory()

        with pytest.raises(TradeTimeoutError):
            trade_engine.execute(
                account.account_id,
                buy("AAPL", 10),
                deadline=time.monotonic() - 1,
            )

        assert balance_of(uow_factory, account.account_id) == Decimal("5000.00")
        assert position_of(uow_factory, account.account_id, "AAPL") is None
        assert trade_engine.list_transactions(account.account_id) == []

    def test_lock_not_acquired_before_deadline(
        self, trade_engine, lock_registry, uow_factory, account_factory
    ):
        """
        GIVEN another holder of the account's lock
        WHEN a trade with a short deadline is placed
        THEN TradeTimeoutError is raised and cash is untouched
        """
        account = account_factory()

        with lock_registry.hold(account.account_id):
            with pytest.raises(TradeTimeoutError):
                trade_engine.execute(
                    account.account_id,
                    buy("AAPL", 1),
                    deadline=time.monotonic() + 0.1,
                )

        assert balance_of(uow_factory, account.account_id) == Decimal("5000.00")

    def test_stalled_quote_abandoned_at_deadline(
        self, uow_factory, price_oracle, lock_registry, account_factory
    ):
        """
        GIVEN an oracle that stalls for 3s
        WHEN a trade with a 0.2s deadline is placed
        THEN TradeTimeoutError is raised well before the stall ends
             and the account's lock is free for the next trade
        """
        account = account_factory()
        slow = SlowPriceOracle(price_oracle, delay_seconds=3.0)
        engine = TradeEngine(uow_factory, slow, lock_registry=lock_registry)

        started = time.monotonic()
        with pytest.raises(TradeTimeoutError):
            engine.execute(account.account_id, buy("AAPL", 1), deadline=time.monotonic() + 0.2)
        elapsed = time.monotonic() - started

        assert elapsed < 1.5
        with lock_registry.hold(account.account_id, timeout=0.5):
            pass
        assert balance_of(uow_factory, account.account_id) == Decimal("5000.00")

    def test_generous_deadline_commits(self, trade_engine, uow_factory, account_factory):
        """
        GIVEN a deadline well in the future
        WHEN a trade executes
        THEN it commits normally
        """
        account = account_factory()

        trade_engine.execute(account.account_id, buy("AAPL", 1), deadline=time.monotonic() + 30)

        assert balance_of(uow_factory, account.account_id) == Decimal("4950.00")


# =============================================================================
# QUERY TESTS
# =============================================================================


class TestQueries:
    """Tests for history and portfolio views."""

    def test_list_transactions_oldest_first(self, trade_engine, account_factory):
        """
        GIVEN three trades
        WHEN I list transactions
        THEN they come back in execution order
        """
        account = account_factory()
        first = trade_engine.execute(account.account_id, buy("AAPL", 1))
        second = trade_engine.execute(account.account_id, buy("MSFT", 2))
        third = trade_engine.execute(account.account_id, sell("AAPL", 1))

        txns = trade_engine.list_transactions(account.account_id)

        assert [t.txn_id for t in txns] == [first.txn_id, second.txn_id, third.txn_id]

    def test_portfolio_lists_open_positions(self, trade_engine, account_factory):
        """
        GIVEN buys of AAPL and MSFT and a full sale of AAPL
        WHEN I get the portfolio
        THEN only MSFT is listed and cash reflects all trades
        """
        account = account_factory()
        trade_engine.execute(account.account_id, buy("AAPL", 2))
        trade_engine.execute(account.account_id, buy("MSFT", 5))
        trade_engine.execute(account.account_id, sell("AAPL", 2))

        view = trade_engine.get_portfolio(account.account_id)

        assert view.cash_balance == Decimal("4800.00")
        assert [p.symbol for p in view.positions] == ["MSFT"]
        assert view.positions[0].shares == Decimal("5")

    def test_queries_for_unknown_account_rejected(self, trade_engine):
        """
        GIVEN no such account
        WHEN I request history or portfolio
        THEN AccountNotFoundError is raised
        """
        with pytest.raises(AccountNotFoundError):
            trade_engine.list_transactions("missing")
        with pytest.raises(AccountNotFoundError):
            trade_engine.get_portfolio("missing")
