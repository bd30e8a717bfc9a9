"""Account management endpoints."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_account_service
from papertrade.api.schemas import (
    AccountCreate,
    AccountResponse,
    TraderProfileUpdateRequest,
)
from papertrade.services import AccountService, TraderProfileUpdate

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create a new account funded with the initial balance."""
    account = service.create_account(data.username)
    return AccountResponse.model_validate(account)


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    service: AccountService = Depends(get_account_service),
) -> list[AccountResponse]:
    """List all accounts."""
    return [AccountResponse.model_validate(a) for a in service.list_accounts()]


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get a single account by ID."""
    return AccountResponse.model_validate(service.get_account(account_id))


@router.put("/{account_id}/trader-profile", response_model=AccountResponse)
def update_trader_profile(
    account_id: str,
    data: TraderProfileUpdateRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Opt in or out of being a trader, and set fee and bio."""
    patch = TraderProfileUpdate(
        is_trader=data.is_trader,
        subscription_fee=data.subscription_fee,
        bio=data.bio,
    )
    return AccountResponse.model_validate(service.update_trader_profile(account_id, patch))
