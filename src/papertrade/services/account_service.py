"""Account management and trader profiles."""

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from papertrade.core.timezone import now_eastern
from papertrade.core.money import to_cents
from papertrade.core.exceptions import AccountNotFoundError, ValidationError
from papertrade.domain.models import Account
from papertrade.repositories.protocols import UnitOfWorkFactory

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_BALANCE = Decimal("5000.00")


@dataclass
class TraderProfileUpdate:
    """Partial update of an account's trader profile."""

    is_trader: Optional[bool] = None
    subscription_fee: Optional[Decimal] = None
    bio: Optional[str] = None


class AccountService:
    """Creates accounts and maintains trader profiles."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        initial_balance: Decimal = DEFAULT_INITIAL_BALANCE,
    ):
        self._uow_factory = uow_factory
        self._initial_balance = to_cents(initial_balance)

    def create_account(self, username: str) -> Account:
        """
        Create an account funded with the initial virtual balance.

        Args:
            username: Unique, non-blank username

        Returns:
            Created Account instance
        """
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username must not be blank")

        with self._uow_factory() as uow:
            if uow.accounts.get_by_username(username):
                raise ValidationError(f"Account with username '{username}' already exists")

            account = uow.accounts.create(
                Account(
                    account_id=str(uuid.uuid4()),
                    username=username,
                    cash_balance=self._initial_balance,
                    created_at=now_eastern(),
                )
            )
            uow.commit()

        logger.info("Created account %s (%s)", account.account_id, username)
        return account

    def get_account(self, account_id: str) -> Account:
        """Get account by ID."""
        with self._uow_factory() as uow:
            account = uow.accounts.get_by_id(account_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return account

    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        with self._uow_factory() as uow:
            return uow.accounts.list_all()

    def list_traders(self) -> list[Account]:
        """List accounts that can be followed and copy-traded."""
        with self._uow_factory() as uow:
            return uow.accounts.list_traders()

    def update_trader_profile(self, account_id: str, patch: TraderProfileUpdate) -> Account:
        """Opt in or out of being a trader, and set fee and bio."""
        if patch.subscription_fee is not None and patch.subscription_fee < 0:
            raise ValidationError("Subscription fee cannot be negative")

        with self._uow_factory() as uow:
            account = uow.accounts.get_by_id(account_id)
            if not account:
                raise AccountNotFoundError(account_id)

            if patch.is_trader is not None:
                account.is_trader = patch.is_trader
            if patch.subscription_fee is not None:
                account.subscription_fee = to_cents(patch.subscription_fee)
            if patch.bio is not None:
                account.bio = patch.bio

            updated = uow.accounts.update_profile(account)
            uow.commit()
        return updated
