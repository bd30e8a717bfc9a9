"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Boolean,
    Text,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    Index,
    Enum as SqlEnum,
)

from papertrade.repositories.sqlalchemy.database import Base
from papertrade.domain.models.enums import (
    TradeSide,
    CopyTradeStatus,
    RiskLevel,
    SubscriptionStatus,
)


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(String(36), primary_key=True)
    username = Column(String(255), unique=True, nullable=False)
    cash_balance = Column(Numeric(precision=18, scale=2), nullable=False, default=Decimal("0"))
    is_trader = Column(Boolean, nullable=False, default=False)
    subscription_fee = Column(Numeric(precision=18, scale=2), nullable=False, default=Decimal("0"))
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)


class PositionORM(Base):
    """SQLAlchemy model for Position (one row per account/symbol)."""

    __tablename__ = "positions"

    account_id = Column(String(36), ForeignKey("accounts.account_id"), primary_key=True)
    symbol = Column(String(20), primary_key=True)
    shares = Column(Numeric(precision=18, scale=6), nullable=False)
    average_price = Column(Numeric(precision=18, scale=2), nullable=False)
    last_updated = Column(DateTime, nullable=True)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (append-only)."""

    __tablename__ = "transactions"
    __table_args__ = (Index("ix_transactions_account_time", "account_id", "timestamp"),)

    txn_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    shares = Column(Numeric(precision=18, scale=6), nullable=False)
    price = Column(Numeric(precision=18, scale=2), nullable=False)
    side = Column(SqlEnum(TradeSide), nullable=False)
    timestamp = Column(DateTime, nullable=False)


class CopySettingORM(Base):
    """SQLAlchemy model for CopySetting."""

    __tablename__ = "copy_settings"
    __table_args__ = (
        UniqueConstraint(
            "follower_account_id",
            "followed_trader_id",
            name="uq_copy_settings_follower_trader",
        ),
    )

    setting_id = Column(String(36), primary_key=True)
    follower_account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    followed_trader_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)
    copy_amount_cash = Column(Numeric(precision=18, scale=2), nullable=False)
    max_position_size_cash = Column(Numeric(precision=18, scale=2), nullable=False)
    risk_level = Column(SqlEnum(RiskLevel), nullable=False, default=RiskLevel.MEDIUM)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)


class CopiedTradeORM(Base):
    """SQLAlchemy model for CopiedTrade (fanout outcome)."""

    __tablename__ = "copied_trades"

    copied_trade_id = Column(String(36), primary_key=True)
    original_txn_id = Column(String(36), ForeignKey("transactions.txn_id"), nullable=False, index=True)
    follower_account_id = Column(
        String(36), ForeignKey("accounts.account_id"), nullable=False, index=True
    )
    setting_id = Column(String(36), ForeignKey("copy_settings.setting_id"), nullable=True)
    status = Column(SqlEnum(CopyTradeStatus), nullable=False)
    copied_shares = Column(Numeric(precision=18, scale=6), nullable=False)
    copied_price = Column(Numeric(precision=18, scale=2), nullable=False)
    follower_txn_id = Column(String(36), ForeignKey("transactions.txn_id"), nullable=True)
    error = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)
    completed_at = Column(DateTime, nullable=True)


class FollowEdgeORM(Base):
    """SQLAlchemy model for FollowEdge."""

    __tablename__ = "follows"

    follower_account_id = Column(String(36), ForeignKey("accounts.account_id"), primary_key=True)
    followed_account_id = Column(
        String(36), ForeignKey("accounts.account_id"), primary_key=True, index=True
    )
    created_at = Column(DateTime, nullable=False)


class SubscriptionORM(Base):
    """SQLAlchemy model for Subscription."""

    __tablename__ = "subscriptions"

    subscription_id = Column(String(36), primary_key=True)
    subscriber_account_id = Column(
        String(36), ForeignKey("accounts.account_id"), nullable=False, index=True
    )
    trader_account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    monthly_fee = Column(Numeric(precision=18, scale=2), nullable=False)
    status = Column(SqlEnum(SubscriptionStatus), nullable=False, default=SubscriptionStatus.ACTIVE)
    started_at = Column(DateTime, nullable=False)
    cancelled_at = Column(DateTime, nullable=True)
