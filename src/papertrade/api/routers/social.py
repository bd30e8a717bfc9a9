"""Follow and subscription endpoints."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_social_service
from papertrade.api.schemas import (
    FollowResponse,
    SubscriptionCreateRequest,
    SubscriptionResponse,
)
from papertrade.services import SocialService

router = APIRouter(prefix="/accounts/{account_id}", tags=["social"])


@router.post("/follows/{trader_id}", response_model=FollowResponse, status_code=201)
def follow(
    account_id: str,
    trader_id: str,
    service: SocialService = Depends(get_social_service),
) -> FollowResponse:
    """Follow another account."""
    return FollowResponse.model_validate(service.follow(account_id, trader_id))


@router.delete("/follows/{trader_id}", status_code=204)
def unfollow(
    account_id: str,
    trader_id: str,
    service: SocialService = Depends(get_social_service),
) -> None:
    """Stop following an account."""
    service.unfollow(account_id, trader_id)


@router.get("/followers", response_model=list[FollowResponse])
def list_followers(
    account_id: str,
    service: SocialService = Depends(get_social_service),
) -> list[FollowResponse]:
    """Accounts following this one."""
    return [FollowResponse.model_validate(e) for e in service.followers_of(account_id)]


@router.get("/following", response_model=list[FollowResponse])
def list_following(
    account_id: str,
    service: SocialService = Depends(get_social_service),
) -> list[FollowResponse]:
    """Accounts this one follows."""
    return [FollowResponse.model_validate(e) for e in service.following_of(account_id)]


@router.post("/subscriptions", response_model=SubscriptionResponse, status_code=201)
def subscribe(
    account_id: str,
    data: SubscriptionCreateRequest,
    service: SocialService = Depends(get_social_service),
) -> SubscriptionResponse:
    """Subscribe to a trader at their current fee."""
    return SubscriptionResponse.model_validate(service.subscribe(account_id, data.trader_id))


@router.post("/subscriptions/{subscription_id}/cancel", response_model=SubscriptionResponse)
def cancel_subscription(
    account_id: str,
    subscription_id: str,
    service: SocialService = Depends(get_social_service),
) -> SubscriptionResponse:
    """Cancel one of this account's subscriptions."""
    return SubscriptionResponse.model_validate(
        service.cancel_subscription(account_id, subscription_id)
    )


@router.get("/subscriptions", response_model=list[SubscriptionResponse])
def list_subscriptions(
    account_id: str,
    service: SocialService = Depends(get_social_service),
) -> list[SubscriptionResponse]:
    """Active subscriptions."""
    return [SubscriptionResponse.model_validate(s) for s in service.active_subscriptions(account_id)]
