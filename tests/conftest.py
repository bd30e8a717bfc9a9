"""
Pytest configuration and fixtures for paper trading tests.

This module provides:
- File-backed SQLite database per test (threads need real connections)
- Unit of work factory and a fresh per-account lock registry
- Deterministic price oracle
- Service fixtures and account factories
- FastAPI test client wired to the test database
"""

import time
from decimal import Decimal
from functools import partial
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from papertrade.main import app
from papertrade.api.deps import get_account_locks, get_price_oracle, get_uow_factory
from papertrade.config.settings import Settings, set_settings, reset_settings
from papertrade.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from papertrade.repositories.sqlalchemy.database import (
    build_engine,
    build_session_factory,
    init_db,
    reset_database,
)
from papertrade.providers import FixedPriceOracle
from papertrade.services import (
    AccountLockRegistry,
    TradeEngine,
    FanoutController,
    TradingService,
    AccountService,
    SocialService,
    CopySettingsService,
    LeaderboardService,
    TraderProfileUpdate,
    CopySettingCreate,
)
from papertrade.domain.models import Account, CopySetting


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """Create a SQLite database file for this test."""
    reset_settings()

    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def uow_factory(test_engine):
    """Factory opening units of work against the test database."""
    return partial(SqlAlchemyUnitOfWork, build_session_factory(test_engine))


@pytest.fixture
def lock_registry() -> AccountLockRegistry:
    """Fresh lock registry so tests never share account locks."""
    return AccountLockRegistry()


# =============================================================================
# PRICE ORACLE FIXTURES
# =============================================================================


@pytest.fixture
def price_oracle() -> FixedPriceOracle:
    """Deterministic oracle with a few well-known prices."""
    return FixedPriceOracle({
        "AAPL": Decimal("50.00"),
        "MSFT": Decimal("40.00"),
        "TSLA": Decimal("25.00"),
    })


class SlowPriceOracle:
    """Oracle that sleeps before quoting, to push trades past their deadline."""

    def __init__(self, inner, delay_seconds: float, slow_calls_after: int = 0):
        self._inner = inner
        self._delay = delay_seconds
        self._calls = 0
        self._slow_calls_after = slow_calls_after

    def quote(self, symbol: str) -> Decimal:
        self._calls += 1
        if self._calls > self._slow_calls_after:
            time.sleep(self._delay)
        return self._inner.quote(symbol)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def trade_engine(uow_factory, price_oracle, lock_registry) -> TradeEngine:
    """Provide test TradeEngine."""
    return TradeEngine(uow_factory, price_oracle, lock_registry=lock_registry)


@pytest.fixture
def fanout_controller(uow_factory, trade_engine) -> FanoutController:
    """Provide test FanoutController."""
    return FanoutController(uow_factory, trade_engine, timeout_seconds=5.0, max_workers=4)


@pytest.fixture
def trading_service(uow_factory, trade_engine, fanout_controller) -> TradingService:
    """Provide test TradingService."""
    return TradingService(uow_factory, trade_engine, fanout_controller)


@pytest.fixture
def account_service(uow_factory) -> AccountService:
    """Provide test AccountService with the default $5000 starting balance."""
    return AccountService(uow_factory, initial_balance=Decimal("5000.00"))


@pytest.fixture
def social_service(uow_factory) -> SocialService:
    """Provide test SocialService."""
    return SocialService(uow_factory)


@pytest.fixture
def copy_settings_service(uow_factory) -> CopySettingsService:
    """Provide test CopySettingsService."""
    return CopySettingsService(uow_factory)


@pytest.fixture
def leaderboard_service(uow_factory, price_oracle) -> LeaderboardService:
    """Provide test LeaderboardService."""
    return LeaderboardService(uow_factory, price_oracle)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_service, uow_factory) -> Callable[..., Account]:
    """
    Factory for creating test accounts.

    ``balance`` overrides the starting cash; ``is_trader`` opts the account in.
    """
    counter = {"n": 0}

    def _create_account(
        username: Optional[str] = None,
        balance: Optional[Decimal] = None,
        is_trader: bool = False,
    ) -> Account:
        counter["n"] += 1
        account = account_service.create_account(username or f"user{counter['n']}")
        if balance is not None:
            with uow_factory() as uow:
                uow.accounts.adjust_balance(account.account_id, Decimal(balance) - account.cash_balance)
                uow.commit()
        if is_trader:
            account_service.update_trader_profile(
                account.account_id, TraderProfileUpdate(is_trader=True)
            )
        return account_service.get_account(account.account_id)

    return _create_account


@pytest.fixture
def copier_factory(
    social_service,
    copy_settings_service,
) -> Callable[..., CopySetting]:
    """Factory that makes ``follower`` follow and copy ``trader``."""

    def _copy(
        follower: Account,
        trader: Account,
        copy_amount: Decimal = Decimal("100.00"),
        max_position: Decimal = Decimal("1000.00"),
        enabled: bool = True,
    ) -> CopySetting:
        social_service.follow(follower.account_id, trader.account_id)
        return copy_settings_service.create_setting(
            follower.account_id,
            CopySettingCreate(
                followed_trader_id=trader.account_id,
                copy_amount_cash=copy_amount,
                max_position_size_cash=max_position,
                enabled=enabled,
            ),
        )

    return _copy


@pytest.fixture
def trader(account_factory) -> Account:
    """A trader with the default $5000 balance."""
    return account_factory(username="trader", is_trader=True)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(tmp_path, uow_factory, price_oracle, lock_registry) -> TestClient:
    """Provide FastAPI test client with test database and fixed prices."""
    set_settings(Settings(data_dir=tmp_path, fanout_timeout_seconds=5.0))
    reset_database()

    app.dependency_overrides[get_uow_factory] = lambda: uow_factory
    app.dependency_overrides[get_price_oracle] = lambda: price_oracle
    app.dependency_overrides[get_account_locks] = lambda: lock_registry
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def balance_of(uow_factory, account_id: str) -> Decimal:
    """Current committed cash balance."""
    with uow_factory() as uow:
        return uow.accounts.get_by_id(account_id).cash_balance


def position_of(uow_factory, account_id: str, symbol: str):
    """Current committed position, or None."""
    with uow_factory() as uow:
        return uow.positions.get(account_id, symbol)
