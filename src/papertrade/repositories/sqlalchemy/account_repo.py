"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import as_eastern
from papertrade.core.exceptions import AccountNotFoundError
from papertrade.core.money import to_cents
from papertrade.domain.models import Account
from papertrade.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            account_id=account.account_id,
            username=account.username,
            cash_balance=account.cash_balance,
            is_trader=account.is_trader,
            subscription_fee=account.subscription_fee,
            bio=account.bio,
            created_at=account.created_at,
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        orm_account = self._get_orm(account_id)
        return self._to_domain(orm_account) if orm_account else None

    def get_by_username(self, username: str) -> Optional[Account]:
        """Retrieve account by username."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.username == username
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def list_all(self) -> list[Account]:
        """List all accounts."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.username).all()
        return [self._to_domain(a) for a in orm_accounts]

    def list_traders(self) -> list[Account]:
        """List accounts that opted in as traders."""
        orm_accounts = (
            self._db.query(AccountORM)
            .filter(AccountORM.is_trader == True)  # noqa: E712
            .order_by(AccountORM.username)
            .all()
        )
        return [self._to_domain(a) for a in orm_accounts]

    def update_profile(self, account: Account) -> Account:
        """Persist trader profile fields."""
        orm_account = self._get_orm(account.account_id)
        if not orm_account:
            raise AccountNotFoundError(account.account_id)
        orm_account.is_trader = account.is_trader
        orm_account.subscription_fee = account.subscription_fee
        orm_account.bio = account.bio
        self._db.flush()
        return self._to_domain(orm_account)

    def adjust_balance(self, account_id: str, delta: Decimal) -> Account:
        """Add ``delta`` to the cash balance."""
        orm_account = self._get_orm(account_id)
        if not orm_account:
            raise AccountNotFoundError(account_id)
        current = Decimal(str(orm_account.cash_balance))
        orm_account.cash_balance = to_cents(current + delta)
        self._db.flush()
        return self._to_domain(orm_account)

    def _get_orm(self, account_id: str) -> Optional[AccountORM]:
        return self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).first()

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            username=orm.username,
            cash_balance=to_cents(Decimal(str(orm.cash_balance))),
            is_trader=bool(orm.is_trader),
            subscription_fee=to_cents(Decimal(str(orm.subscription_fee))),
            bio=orm.bio,
            created_at=as_eastern(orm.created_at),
        )
