"""SQLAlchemy implementation of SocialRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import as_eastern
from papertrade.core.exceptions import NotFoundError
from papertrade.core.money import to_cents
from papertrade.domain.models import FollowEdge, Subscription, SubscriptionStatus
from papertrade.repositories.sqlalchemy.orm_models import FollowEdgeORM, SubscriptionORM


class SqlAlchemySocialRepository:
    """SQLAlchemy-backed follow graph and subscription repository."""

    def __init__(self, db: Session):
        self._db = db

    # Follow edges

    def add_follow(self, edge: FollowEdge) -> FollowEdge:
        """Persist a follow edge."""
        orm_edge = FollowEdgeORM(
            follower_account_id=edge.follower_account_id,
            followed_account_id=edge.followed_account_id,
            created_at=edge.created_at,
        )
        self._db.add(orm_edge)
        self._db.flush()
        return self._edge_to_domain(orm_edge)

    def get_follow(self, follower_account_id: str, followed_account_id: str) -> Optional[FollowEdge]:
        """Retrieve one edge."""
        orm_edge = (
            self._db.query(FollowEdgeORM)
            .filter(
                FollowEdgeORM.follower_account_id == follower_account_id,
                FollowEdgeORM.followed_account_id == followed_account_id,
            )
            .first()
        )
        return self._edge_to_domain(orm_edge) if orm_edge else None

    def remove_follow(self, follower_account_id: str, followed_account_id: str) -> None:
        """Delete a follow edge."""
        self._db.query(FollowEdgeORM).filter(
            FollowEdgeORM.follower_account_id == follower_account_id,
            FollowEdgeORM.followed_account_id == followed_account_id,
        ).delete()
        self._db.flush()

    def followers_of(self, account_id: str) -> list[FollowEdge]:
        """Edges pointing at ``account_id``, oldest first."""
        orm_edges = (
            self._db.query(FollowEdgeORM)
            .filter(FollowEdgeORM.followed_account_id == account_id)
            .order_by(FollowEdgeORM.created_at)
            .all()
        )
        return [self._edge_to_domain(e) for e in orm_edges]

    def following_of(self, account_id: str) -> list[FollowEdge]:
        """Edges leaving ``account_id``."""
        orm_edges = (
            self._db.query(FollowEdgeORM)
            .filter(FollowEdgeORM.follower_account_id == account_id)
            .order_by(FollowEdgeORM.created_at)
            .all()
        )
        return [self._edge_to_domain(e) for e in orm_edges]

    # Subscriptions

    def create_subscription(self, subscription: Subscription) -> Subscription:
        """Persist a new subscription."""
        orm_sub = SubscriptionORM(
            subscription_id=subscription.subscription_id,
            subscriber_account_id=subscription.subscriber_account_id,
            trader_account_id=subscription.trader_account_id,
            monthly_fee=subscription.monthly_fee,
            status=subscription.status,
            started_at=subscription.started_at,
            cancelled_at=subscription.cancelled_at,
        )
        self._db.add(orm_sub)
        self._db.flush()
        return self._subscription_to_domain(orm_sub)

    def get_subscription(self, subscription_id: str) -> Optional[Subscription]:
        """Retrieve subscription by ID."""
        orm_sub = self._get_subscription_orm(subscription_id)
        return self._subscription_to_domain(orm_sub) if orm_sub else None

    def update_subscription(self, subscription: Subscription) -> Subscription:
        """Persist subscription status changes."""
        orm_sub = self._get_subscription_orm(subscription.subscription_id)
        if not orm_sub:
            raise NotFoundError("Subscription", subscription.subscription_id)
        orm_sub.status = subscription.status
        orm_sub.cancelled_at = subscription.cancelled_at
        self._db.flush()
        return self._subscription_to_domain(orm_sub)

    def find_active_subscription(
        self,
        subscriber_account_id: str,
        trader_account_id: str,
    ) -> Optional[Subscription]:
        """Active subscription for the pair."""
        orm_sub = (
            self._db.query(SubscriptionORM)
            .filter(
                SubscriptionORM.subscriber_account_id == subscriber_account_id,
                SubscriptionORM.trader_account_id == trader_account_id,
                SubscriptionORM.status == SubscriptionStatus.ACTIVE,
            )
            .first()
        )
        return self._subscription_to_domain(orm_sub) if orm_sub else None

    def active_subscriptions(self, subscriber_account_id: str) -> list[Subscription]:
        """List active subscriptions of a subscriber."""
        orm_subs = (
            self._db.query(SubscriptionORM)
            .filter(
                SubscriptionORM.subscriber_account_id == subscriber_account_id,
                SubscriptionORM.status == SubscriptionStatus.ACTIVE,
            )
            .order_by(SubscriptionORM.started_at)
            .all()
        )
        return [self._subscription_to_domain(s) for s in orm_subs]

    def _get_subscription_orm(self, subscription_id: str) -> Optional[SubscriptionORM]:
        return self._db.query(SubscriptionORM).filter(
            SubscriptionORM.subscription_id == subscription_id
        ).first()

    @staticmethod
    def _edge_to_domain(orm: FollowEdgeORM) -> FollowEdge:
        return FollowEdge(
            follower_account_id=orm.follower_account_id,
            followed_account_id=orm.followed_account_id,
            created_at=as_eastern(orm.created_at),
        )

    @staticmethod
    def _subscription_to_domain(orm: SubscriptionORM) -> Subscription:
        return Subscription(
            subscription_id=orm.subscription_id,
            subscriber_account_id=orm.subscriber_account_id,
            trader_account_id=orm.trader_account_id,
            monthly_fee=to_cents(Decimal(str(orm.monthly_fee))),
            status=orm.status,
            started_at=as_eastern(orm.started_at),
            cancelled_at=as_eastern(orm.cancelled_at),
        )
