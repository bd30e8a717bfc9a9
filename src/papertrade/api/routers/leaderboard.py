"""Trader directory and leaderboard endpoints."""

from fastapi import APIRouter, Depends, Query

from papertrade.api.deps import get_account_service, get_leaderboard_service
from papertrade.api.schemas import LeaderboardEntryResponse, TraderResponse
from papertrade.services import AccountService, LeaderboardService

router = APIRouter(tags=["traders"])


@router.get("/traders", response_model=list[TraderResponse])
def list_traders(
    service: AccountService = Depends(get_account_service),
) -> list[TraderResponse]:
    """Accounts that opted in as traders."""
    return [TraderResponse.model_validate(a) for a in service.list_traders()]


@router.get("/leaderboard", response_model=list[LeaderboardEntryResponse])
def get_leaderboard(
    limit: int = Query(10, ge=1, le=100, description="Number of rows"),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> list[LeaderboardEntryResponse]:
    """Accounts ranked by cash plus market value of positions."""
    return [LeaderboardEntryResponse.model_validate(e) for e in service.get_leaderboard(limit)]
