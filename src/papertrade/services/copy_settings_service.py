"""Follower-owned copy trading settings and copied trade history."""

import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from papertrade.core.timezone import now_eastern
from papertrade.core.money import to_cents
from papertrade.core.exceptions import (
    AccountNotFoundError,
    NotFoundError,
    ValidationError,
)
from papertrade.domain.models import CopiedTrade, CopySetting, RiskLevel
from papertrade.repositories.protocols import UnitOfWorkFactory


@dataclass
class CopySettingCreate:
    """Input data for creating a copy setting."""

    followed_trader_id: str
    copy_amount_cash: Decimal
    max_position_size_cash: Decimal
    risk_level: RiskLevel = RiskLevel.MEDIUM
    enabled: bool = True


@dataclass
class CopySettingUpdate:
    """Partial update data for a copy setting."""

    copy_amount_cash: Optional[Decimal] = None
    max_position_size_cash: Optional[Decimal] = None
    risk_level: Optional[RiskLevel] = None
    enabled: Optional[bool] = None


class CopySettingsService:
    """
    CRUD for copy settings, scoped to the owning follower.

    At most one setting exists per (follower, trader) pair; callers change
    an existing setting with ``update_setting`` instead of adding another.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    def create_setting(self, follower_id: str, data: CopySettingCreate) -> CopySetting:
        """Create the follower's setting for one trader."""
        copy_amount = to_cents(data.copy_amount_cash)
        max_position_size = to_cents(data.max_position_size_cash)
        self._validate_amounts(copy_amount, max_position_size)
        if follower_id == data.followed_trader_id:
            raise ValidationError("Accounts cannot copy their own trades")

        with self._uow_factory() as uow:
            if not uow.accounts.get_by_id(follower_id):
                raise AccountNotFoundError(follower_id)
            trader = uow.accounts.get_by_id(data.followed_trader_id)
            if not trader:
                raise AccountNotFoundError(data.followed_trader_id)
            if not trader.is_trader:
                raise ValidationError(f"Account {trader.account_id} is not a trader")

            existing = [
                s for s in uow.copy_trades.settings_for(follower_id)
                if s.followed_trader_id == data.followed_trader_id
            ]
            if existing:
                raise ValidationError(
                    f"Copy setting for trader {data.followed_trader_id} already exists; update it instead"
                )

            now = now_eastern()
            setting = uow.copy_trades.create_setting(
                CopySetting(
                    setting_id=str(uuid.uuid4()),
                    follower_account_id=follower_id,
                    followed_trader_id=data.followed_trader_id,
                    copy_amount_cash=copy_amount,
                    max_position_size_cash=max_position_size,
                    enabled=data.enabled,
                    risk_level=data.risk_level,
                    created_at=now,
                    updated_at=now,
                )
            )
            uow.commit()
        return setting

    def update_setting(
        self,
        follower_id: str,
        setting_id: str,
        patch: CopySettingUpdate,
    ) -> CopySetting:
        """Apply a partial update; only the owning follower may do this."""
        with self._uow_factory() as uow:
            setting = uow.copy_trades.get_setting(setting_id)
            if not setting or setting.follower_account_id != follower_id:
                raise NotFoundError("CopySetting", setting_id)

            if patch.copy_amount_cash is not None:
                setting.copy_amount_cash = to_cents(patch.copy_amount_cash)
            if patch.max_position_size_cash is not None:
                setting.max_position_size_cash = to_cents(patch.max_position_size_cash)
            if patch.risk_level is not None:
                setting.risk_level = RiskLevel(patch.risk_level)
            if patch.enabled is not None:
                setting.enabled = patch.enabled
            self._validate_amounts(setting.copy_amount_cash, setting.max_position_size_cash)

            setting.updated_at = now_eastern()
            updated = uow.copy_trades.update_setting(setting)
            uow.commit()
        return updated

    def list_settings(self, follower_id: str) -> list[CopySetting]:
        """The follower's settings."""
        with self._uow_factory() as uow:
            if not uow.accounts.get_by_id(follower_id):
                raise AccountNotFoundError(follower_id)
            return uow.copy_trades.settings_for(follower_id)

    def list_copied_trades(self, follower_id: str) -> list[CopiedTrade]:
        """The follower's copy trade outcomes, newest first."""
        with self._uow_factory() as uow:
            if not uow.accounts.get_by_id(follower_id):
                raise AccountNotFoundError(follower_id)
            return uow.copy_trades.list_copied_trades(follower_id)

    def copied_trades_for_transaction(self, original_txn_id: str) -> list[CopiedTrade]:
        """All follower attempts spawned by one trader transaction."""
        with self._uow_factory() as uow:
            return uow.copy_trades.list_by_original(original_txn_id)

    @staticmethod
    def _validate_amounts(copy_amount: Decimal, max_position_size: Decimal) -> None:
        if copy_amount is None or copy_amount <= 0:
            raise ValidationError("copy_amount_cash must be > 0")
        if max_position_size is None or max_position_size <= 0:
            raise ValidationError("max_position_size_cash must be > 0")
