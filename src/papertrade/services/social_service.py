"""Follow graph and trader subscriptions."""

import logging
import uuid

from papertrade.core.timezone import now_eastern
from papertrade.core.exceptions import (
    AccountNotFoundError,
    NotFoundError,
    ValidationError,
)
from papertrade.domain.models import (
    FollowEdge,
    Subscription,
    SubscriptionStatus,
)
from papertrade.repositories.protocols import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class SocialService:
    """
    Manages who follows whom and who subscribes to which trader.

    Following is what makes an account eligible for copy-trade fanout;
    subscriptions only record the trader's fee at the time of subscribing.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    def follow(self, follower_id: str, followed_id: str) -> FollowEdge:
        """Add a follow edge."""
        if follower_id == followed_id:
            raise ValidationError("Accounts cannot follow themselves")

        with self._uow_factory() as uow:
            for account_id in (follower_id, followed_id):
                if not uow.accounts.get_by_id(account_id):
                    raise AccountNotFoundError(account_id)
            if uow.social.get_follow(follower_id, followed_id):
                raise ValidationError("Already following this account")

            edge = uow.social.add_follow(
                FollowEdge(
                    follower_account_id=follower_id,
                    followed_account_id=followed_id,
                    created_at=now_eastern(),
                )
            )
            uow.commit()
        return edge

    def unfollow(self, follower_id: str, followed_id: str) -> None:
        """Remove a follow edge."""
        with self._uow_factory() as uow:
            if not uow.social.get_follow(follower_id, followed_id):
                raise NotFoundError("Follow", f"{follower_id}->{followed_id}")
            uow.social.remove_follow(follower_id, followed_id)
            uow.commit()

    def followers_of(self, account_id: str) -> list[FollowEdge]:
        """Edges pointing at ``account_id``."""
        with self._uow_factory() as uow:
            if not uow.accounts.get_by_id(account_id):
                raise AccountNotFoundError(account_id)
            return uow.social.followers_of(account_id)

    def following_of(self, account_id: str) -> list[FollowEdge]:
        """Edges leaving ``account_id``."""
        with self._uow_factory() as uow:
            if not uow.accounts.get_by_id(account_id):
                raise AccountNotFoundError(account_id)
            return uow.social.following_of(account_id)

    def subscribe(self, subscriber_id: str, trader_id: str) -> Subscription:
        """Subscribe to a trader at the trader's current fee."""
        if subscriber_id == trader_id:
            raise ValidationError("Accounts cannot subscribe to themselves")

        with self._uow_factory() as uow:
            if not uow.accounts.get_by_id(subscriber_id):
                raise AccountNotFoundError(subscriber_id)
            trader = uow.accounts.get_by_id(trader_id)
            if not trader:
                raise AccountNotFoundError(trader_id)
            if not trader.is_trader:
                raise ValidationError(f"Account {trader_id} is not a trader")
            if uow.social.find_active_subscription(subscriber_id, trader_id):
                raise ValidationError("Already subscribed to this trader")

            subscription = uow.social.create_subscription(
                Subscription(
                    subscription_id=str(uuid.uuid4()),
                    subscriber_account_id=subscriber_id,
                    trader_account_id=trader_id,
                    monthly_fee=trader.subscription_fee,
                    started_at=now_eastern(),
                )
            )
            uow.commit()

        logger.info(
            "Account %s subscribed to trader %s at %s/month",
            subscriber_id, trader_id, subscription.monthly_fee,
        )
        return subscription

    def cancel_subscription(self, subscriber_id: str, subscription_id: str) -> Subscription:
        """Cancel one of the subscriber's own subscriptions (idempotent)."""
        with self._uow_factory() as uow:
            subscription = uow.social.get_subscription(subscription_id)
            if not subscription or subscription.subscriber_account_id != subscriber_id:
                raise NotFoundError("Subscription", subscription_id)
            if subscription.status == SubscriptionStatus.CANCELLED:
                return subscription

            subscription.status = SubscriptionStatus.CANCELLED
            subscription.cancelled_at = now_eastern()
            updated = uow.social.update_subscription(subscription)
            uow.commit()
        return updated

    def active_subscriptions(self, subscriber_id: str) -> list[Subscription]:
        """Subscriber's active subscriptions."""
        with self._uow_factory() as uow:
            if not uow.accounts.get_by_id(subscriber_id):
                raise AccountNotFoundError(subscriber_id)
            return uow.social.active_subscriptions(subscriber_id)
