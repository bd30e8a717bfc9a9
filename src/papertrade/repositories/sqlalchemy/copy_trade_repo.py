"""SQLAlchemy implementation of CopyTradeRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import as_eastern
from papertrade.core.exceptions import NotFoundError
from papertrade.core.money import to_cents, to_shares
from papertrade.domain.models import CopySetting, CopiedTrade
from papertrade.repositories.sqlalchemy.orm_models import CopySettingORM, CopiedTradeORM


class SqlAlchemyCopyTradeRepository:
    """SQLAlchemy-backed repository for copy settings and copied trades."""

    def __init__(self, db: Session):
        self._db = db

    # Settings

    def create_setting(self, setting: CopySetting) -> CopySetting:
        """Persist a new copy setting."""
        orm_setting = CopySettingORM(
            setting_id=setting.setting_id,
            follower_account_id=setting.follower_account_id,
            followed_trader_id=setting.followed_trader_id,
            enabled=setting.enabled,
            copy_amount_cash=setting.copy_amount_cash,
            max_position_size_cash=setting.max_position_size_cash,
            risk_level=setting.risk_level,
            created_at=setting.created_at,
            updated_at=setting.updated_at,
        )
        self._db.add(orm_setting)
        self._db.flush()
        return self._setting_to_domain(orm_setting)

    def get_setting(self, setting_id: str) -> Optional[CopySetting]:
        """Retrieve a setting by ID."""
        orm_setting = self._get_setting_orm(setting_id)
        return self._setting_to_domain(orm_setting) if orm_setting else None

    def update_setting(self, setting: CopySetting) -> CopySetting:
        """Persist changes to a setting."""
        orm_setting = self._get_setting_orm(setting.setting_id)
        if not orm_setting:
            raise NotFoundError("CopySetting", setting.setting_id)
        orm_setting.enabled = setting.enabled
        orm_setting.copy_amount_cash = setting.copy_amount_cash
        orm_setting.max_position_size_cash = setting.max_position_size_cash
        orm_setting.risk_level = setting.risk_level
        orm_setting.updated_at = setting.updated_at
        self._db.flush()
        return self._setting_to_domain(orm_setting)

    def settings_for(self, follower_account_id: str) -> list[CopySetting]:
        """List a follower's settings, oldest first."""
        orm_settings = (
            self._db.query(CopySettingORM)
            .filter(CopySettingORM.follower_account_id == follower_account_id)
            .order_by(CopySettingORM.created_at, CopySettingORM.setting_id)
            .all()
        )
        return [self._setting_to_domain(s) for s in orm_settings]

    # Copied trades

    def append_copied_trade(self, copied_trade: CopiedTrade) -> CopiedTrade:
        """Record a new fanout attempt."""
        orm_trade = CopiedTradeORM(
            copied_trade_id=copied_trade.copied_trade_id,
            original_txn_id=copied_trade.original_txn_id,
            follower_account_id=copied_trade.follower_account_id,
            setting_id=copied_trade.setting_id,
            status=copied_trade.status,
            copied_shares=copied_trade.copied_shares,
            copied_price=copied_trade.copied_price,
            follower_txn_id=copied_trade.follower_txn_id,
            error=copied_trade.error,
            created_at=copied_trade.created_at,
            completed_at=copied_trade.completed_at,
        )
        self._db.add(orm_trade)
        self._db.flush()
        return self._copied_trade_to_domain(orm_trade)

    def get_copied_trade(self, copied_trade_id: str) -> Optional[CopiedTrade]:
        """Retrieve a copied trade by ID."""
        orm_trade = self._get_copied_trade_orm(copied_trade_id)
        return self._copied_trade_to_domain(orm_trade) if orm_trade else None

    def finalize_copied_trade(self, copied_trade: CopiedTrade) -> CopiedTrade:
        """Write the terminal status of a pending attempt."""
        orm_trade = self._get_copied_trade_orm(copied_trade.copied_trade_id)
        if not orm_trade:
            raise NotFoundError("CopiedTrade", copied_trade.copied_trade_id)
        orm_trade.status = copied_trade.status
        orm_trade.copied_price = copied_trade.copied_price
        orm_trade.follower_txn_id = copied_trade.follower_txn_id
        orm_trade.error = copied_trade.error
        orm_trade.completed_at = copied_trade.completed_at
        self._db.flush()
        return self._copied_trade_to_domain(orm_trade)

    def list_copied_trades(self, follower_account_id: str) -> list[CopiedTrade]:
        """List a follower's copied trades, newest first."""
        orm_trades = (
            self._db.query(CopiedTradeORM)
            .filter(CopiedTradeORM.follower_account_id == follower_account_id)
            .order_by(CopiedTradeORM.created_at.desc())
            .all()
        )
        return [self._copied_trade_to_domain(t) for t in orm_trades]

    def list_by_original(self, original_txn_id: str) -> list[CopiedTrade]:
        """List all attempts spawned by one trader transaction."""
        orm_trades = (
            self._db.query(CopiedTradeORM)
            .filter(CopiedTradeORM.original_txn_id == original_txn_id)
            .order_by(CopiedTradeORM.created_at)
            .all()
        )
        return [self._copied_trade_to_domain(t) for t in orm_trades]

    def _get_setting_orm(self, setting_id: str) -> Optional[CopySettingORM]:
        return self._db.query(CopySettingORM).filter(
            CopySettingORM.setting_id == setting_id
        ).first()

    def _get_copied_trade_orm(self, copied_trade_id: str) -> Optional[CopiedTradeORM]:
        return self._db.query(CopiedTradeORM).filter(
            CopiedTradeORM.copied_trade_id == copied_trade_id
        ).first()

    @staticmethod
    def _setting_to_domain(orm: CopySettingORM) -> CopySetting:
        return CopySetting(
            setting_id=orm.setting_id,
            follower_account_id=orm.follower_account_id,
            followed_trader_id=orm.followed_trader_id,
            enabled=bool(orm.enabled),
            copy_amount_cash=to_cents(Decimal(str(orm.copy_amount_cash))),
            max_position_size_cash=to_cents(Decimal(str(orm.max_position_size_cash))),
            risk_level=orm.risk_level,
            created_at=as_eastern(orm.created_at),
            updated_at=as_eastern(orm.updated_at),
        )

    @staticmethod
    def _copied_trade_to_domain(orm: CopiedTradeORM) -> CopiedTrade:
        return CopiedTrade(
            copied_trade_id=orm.copied_trade_id,
            original_txn_id=orm.original_txn_id,
            follower_account_id=orm.follower_account_id,
            setting_id=orm.setting_id,
            status=orm.status,
            copied_shares=to_shares(Decimal(str(orm.copied_shares))),
            copied_price=to_cents(Decimal(str(orm.copied_price))),
            follower_txn_id=orm.follower_txn_id,
            error=orm.error,
            created_at=as_eastern(orm.created_at),
            completed_at=as_eastern(orm.completed_at),
        )
