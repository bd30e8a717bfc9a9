"""
Integration tests for the SQLAlchemy repositories and unit of work.

Tests cover:
- Commit / rollback semantics of the unit of work
- Decimal precision round trips through SQLite
- Database-level uniqueness of copy settings
- Copied trade lifecycle persistence
"""

import uuid
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from papertrade.core.timezone import now_eastern
from papertrade.domain.models import (
    Account,
    CopiedTrade,
    CopySetting,
    CopyTradeStatus,
    Position,
    RiskLevel,
    TradeSide,
    Transaction,
)


def new_account(username: str) -> Account:
    return Account(
        account_id=str(uuid.uuid4()),
        username=username,
        cash_balance=Decimal("5000.00"),
        created_at=now_eastern(),
    )


class TestUnitOfWork:
    """Tests for atomic scopes."""

    def test_commit_persists(self, uow_factory):
        """
        GIVEN a new account created in a unit of work
        WHEN the unit of work commits
        THEN a fresh unit of work can read it
        """
        account = new_account("alice")
        with uow_factory() as uow:
            uow.accounts.create(account)
            uow.commit()

        with uow_factory() as uow:
            loaded = uow.accounts.get_by_id(account.account_id)

        assert loaded.username == "alice"
        assert loaded.cash_balance == Decimal("5000.00")
        assert loaded.created_at.tzinfo is not None

    def test_exit_without_commit_rolls_back(self, uow_factory):
        """
        GIVEN a new account created in a unit of work
        WHEN the unit of work exits without commit
        THEN nothing is persisted
        """
        account = new_account("bob")
        with uow_factory() as uow:
            uow.accounts.create(account)

        with uow_factory() as uow:
            assert uow.accounts.get_by_id(account.account_id) is None

    def test_exception_rolls_back_every_repository(self, uow_factory):
        """
        GIVEN balance, position and transaction writes in one unit of work
        WHEN an exception escapes before commit
        THEN none of the writes are persisted
        """
        account = new_account("carol")
        with uow_factory() as uow:
            uow.accounts.create(account)
            uow.commit()

        with pytest.raises(RuntimeError):
            with uow_factory() as uow:
                uow.accounts.adjust_balance(account.account_id, Decimal("-500.00"))
                uow.positions.upsert(
                    Position(
                        account_id=account.account_id,
                        symbol="AAPL",
                        shares=Decimal("10"),
                        average_price=Decimal("50.00"),
                        last_updated=now_eastern(),
                    )
                )
                uow.transactions.append(
                    Transaction(
                        txn_id=str(uuid.uuid4()),
                        account_id=account.account_id,
                        symbol="AAPL",
                        shares=Decimal("10"),
                        price=Decimal("50.00"),
                        side=TradeSide.BUY,
                        timestamp=now_eastern(),
                    )
                )
                raise RuntimeError("boom")

        with uow_factory() as uow:
            assert uow.accounts.get_by_id(account.account_id).cash_balance == Decimal("5000.00")
            assert uow.positions.get(account.account_id, "AAPL") is None
            assert uow.transactions.list_by_account(account.account_id) == []


class TestPrecision:
    """Tests for Decimal storage."""

    def test_fractional_shares_and_cents_round_trip(self, uow_factory):
        """
        GIVEN a position of 1.234567 shares at $123.45
        WHEN it is stored and reloaded
        THEN both values are exact
        """
        account = new_account("dora")
        with uow_factory() as uow:
            uow.accounts.create(account)
            uow.positions.upsert(
                Position(
                    account_id=account.account_id,
                    symbol="AAPL",
                    shares=Decimal("1.234567"),
                    average_price=Decimal("123.45"),
                    last_updated=now_eastern(),
                )
            )
            uow.commit()

        with uow_factory() as uow:
            position = uow.positions.get(account.account_id, "AAPL")

        assert position.shares == Decimal("1.234567")
        assert position.average_price == Decimal("123.45")


class TestCopyTradeStorage:
    """Tests for copy settings and copied trades."""

    @pytest.fixture
    def pair(self, uow_factory):
        follower = new_account("follower")
        trader = new_account("trader")
        trader.is_trader = True
        with uow_factory() as uow:
            uow.accounts.create(follower)
            uow.accounts.create(trader)
            uow.commit()
        return follower, trader

    def _setting(self, follower, trader) -> CopySetting:
        now = now_eastern()
        return CopySetting(
            setting_id=str(uuid.uuid4()),
            follower_account_id=follower.account_id,
            followed_trader_id=trader.account_id,
            copy_amount_cash=Decimal("100.00"),
            max_position_size_cash=Decimal("1000.00"),
            risk_level=RiskLevel.LOW,
            created_at=now,
            updated_at=now,
        )

    def test_duplicate_setting_rejected_by_database(self, uow_factory, pair):
        """
        GIVEN a setting for (follower, trader)
        WHEN a second row for the same pair is inserted directly
        THEN the database rejects it
        """
        follower, trader = pair
        with uow_factory() as uow:
            uow.copy_trades.create_setting(self._setting(follower, trader))
            uow.commit()

        with pytest.raises(IntegrityError):
            with uow_factory() as uow:
                uow.copy_trades.create_setting(self._setting(follower, trader))

    def test_risk_level_round_trip(self, uow_factory, pair):
        """
        GIVEN a LOW risk setting
        WHEN it is reloaded
        THEN risk_level is RiskLevel.LOW
        """
        follower, trader = pair
        with uow_factory() as uow:
            created = uow.copy_trades.create_setting(self._setting(follower, trader))
            uow.commit()

        with uow_factory() as uow:
            assert uow.copy_trades.get_setting(created.setting_id).risk_level == RiskLevel.LOW

    def test_pending_then_finalized(self, uow_factory, pair):
        """
        GIVEN a PENDING copied trade
        WHEN it is finalized as FAILED with an error
        THEN the stored record carries the terminal status, error and completion time
        """
        follower, trader = pair
        original = Transaction(
            txn_id=str(uuid.uuid4()),
            account_id=trader.account_id,
            symbol="AAPL",
            shares=Decimal("10"),
            price=Decimal("50.00"),
            side=TradeSide.BUY,
            timestamp=now_eastern(),
        )
        with uow_factory() as uow:
            uow.transactions.append(original)
            setting = uow.copy_trades.create_setting(self._setting(follower, trader))
            pending = uow.copy_trades.append_copied_trade(
                CopiedTrade(
                    copied_trade_id=str(uuid.uuid4()),
                    original_txn_id=original.txn_id,
                    follower_account_id=follower.account_id,
                    setting_id=setting.setting_id,
                    status=CopyTradeStatus.PENDING,
                    copied_shares=Decimal("2"),
                    copied_price=Decimal("50.00"),
                    created_at=now_eastern(),
                )
            )
            uow.commit()

        assert pending.is_final is False
        pending.status = CopyTradeStatus.FAILED
        pending.error = "Insufficient funds"
        pending.completed_at = now_eastern()
        with uow_factory() as uow:
            uow.copy_trades.finalize_copied_trade(pending)
            uow.commit()

        with uow_factory() as uow:
            [stored] = uow.copy_trades.list_by_original(original.txn_id)
            assert uow.copy_trades.get_copied_trade(pending.copied_trade_id) == stored

        assert stored.status == CopyTradeStatus.FAILED
        assert stored.is_final is True
        assert stored.error == "Insufficient funds"
        assert stored.completed_at is not None
        assert stored.copied_shares == Decimal("2.000000")
