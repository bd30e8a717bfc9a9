"""Social graph and subscription repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import FollowEdge, Subscription


class SocialRepository(Protocol):
    """Interface for follow edges and subscriptions."""

    def add_follow(self, edge: FollowEdge) -> FollowEdge:
        """Persist a follow edge."""
        ...

    def get_follow(self, follower_account_id: str, followed_account_id: str) -> Optional[FollowEdge]:
        """Retrieve one edge, or None."""
        ...

    def remove_follow(self, follower_account_id: str, followed_account_id: str) -> None:
        """Delete a follow edge."""
        ...

    def followers_of(self, account_id: str) -> list[FollowEdge]:
        """Edges pointing at ``account_id``, oldest first."""
        ...

    def following_of(self, account_id: str) -> list[FollowEdge]:
        """Edges leaving ``account_id``."""
        ...

    def create_subscription(self, subscription: Subscription) -> Subscription:
        """Persist a new subscription."""
        ...

    def get_subscription(self, subscription_id: str) -> Optional[Subscription]:
        """Retrieve subscription by ID."""
        ...

    def update_subscription(self, subscription: Subscription) -> Subscription:
        """Persist subscription status changes."""
        ...

    def find_active_subscription(
        self,
        subscriber_account_id: str,
        trader_account_id: str,
    ) -> Optional[Subscription]:
        """Active subscription for the pair, or None."""
        ...

    def active_subscriptions(self, subscriber_account_id: str) -> list[Subscription]:
        """List active subscriptions of a subscriber."""
        ...
