"""Dependency injection for FastAPI."""

from functools import partial
from typing import Optional

from fastapi import Depends

from papertrade.config.settings import get_settings
from papertrade.providers import PriceOracle, StubPriceOracle
from papertrade.repositories.protocols import UnitOfWorkFactory
from papertrade.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from papertrade.repositories.sqlalchemy.database import get_session_factory
from papertrade.services import (
    AccountLockRegistry,
    get_lock_registry,
    TradeEngine,
    FanoutController,
    TradingService,
    AccountService,
    SocialService,
    CopySettingsService,
    LeaderboardService,
)

# One oracle per process so seeded quotes stay stable across requests
_price_oracle: Optional[StubPriceOracle] = None


def get_uow_factory() -> UnitOfWorkFactory:
    """Provide a factory opening one unit of work per atomic scope."""
    return partial(SqlAlchemyUnitOfWork, get_session_factory())


def get_price_oracle() -> PriceOracle:
    """Provide PriceOracle instance (stub for offline operation)."""
    global _price_oracle
    if _price_oracle is None:
        _price_oracle = StubPriceOracle(seed=get_settings().price_oracle_seed)
    return _price_oracle


def get_account_locks() -> AccountLockRegistry:
    """Provide the process-wide account lock registry."""
    return get_lock_registry()


def get_trade_engine(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
    price_oracle: PriceOracle = Depends(get_price_oracle),
    locks: AccountLockRegistry = Depends(get_account_locks),
) -> TradeEngine:
    """Provide TradeEngine instance."""
    return TradeEngine(uow_factory, price_oracle, lock_registry=locks)


def get_fanout_controller(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
    trade_engine: TradeEngine = Depends(get_trade_engine),
) -> FanoutController:
    """Provide FanoutController instance."""
    settings = get_settings()
    return FanoutController(
        uow_factory,
        trade_engine,
        timeout_seconds=settings.fanout_timeout_seconds,
        max_workers=settings.fanout_max_workers,
    )


def get_trading_service(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
    trade_engine: TradeEngine = Depends(get_trade_engine),
    fanout_controller: FanoutController = Depends(get_fanout_controller),
) -> TradingService:
    """Provide TradingService instance."""
    return TradingService(uow_factory, trade_engine, fanout_controller)


def get_account_service(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(uow_factory, initial_balance=get_settings().initial_balance)


def get_social_service(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
) -> SocialService:
    """Provide SocialService instance."""
    return SocialService(uow_factory)


def get_copy_settings_service(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
) -> CopySettingsService:
    """Provide CopySettingsService instance."""
    return CopySettingsService(uow_factory)


def get_leaderboard_service(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
    price_oracle: PriceOracle = Depends(get_price_oracle),
) -> LeaderboardService:
    """Provide LeaderboardService instance."""
    return LeaderboardService(uow_factory, price_oracle)
