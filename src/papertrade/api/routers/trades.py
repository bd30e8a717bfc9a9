"""Trading endpoints: place trades, history and holdings."""

from fastapi import APIRouter, BackgroundTasks, Depends

from papertrade.api.deps import get_trade_engine, get_trading_service
from papertrade.api.schemas import (
    TradeCreateRequest,
    TransactionResponse,
    PositionResponse,
    PortfolioResponse,
)
from papertrade.domain.views import TradeRequest
from papertrade.services import TradeEngine, TradingService

router = APIRouter(prefix="/accounts/{account_id}", tags=["trades"])


@router.post("/trades", response_model=TransactionResponse, status_code=201)
def place_trade(
    account_id: str,
    data: TradeCreateRequest,
    background_tasks: BackgroundTasks,
    service: TradingService = Depends(get_trading_service),
) -> TransactionResponse:
    """
    Execute a trade at the current oracle price.

    The acting account's transaction is committed before responding; copy
    trades for its followers are processed after the response is sent.
    """
    result = service.place_trade(
        account_id,
        TradeRequest(symbol=data.symbol, shares=data.shares, side=data.side),
        run_fanout=False,
    )
    background_tasks.add_task(service.fanout_for, result.transaction)
    return TransactionResponse.model_validate(result.transaction)


@router.get("/transactions", response_model=list[TransactionResponse])
def list_transactions(
    account_id: str,
    engine: TradeEngine = Depends(get_trade_engine),
) -> list[TransactionResponse]:
    """Transaction history, oldest first."""
    return [TransactionResponse.model_validate(t) for t in engine.list_transactions(account_id)]


@router.get("/portfolio", response_model=PortfolioResponse)
def get_portfolio(
    account_id: str,
    engine: TradeEngine = Depends(get_trade_engine),
) -> PortfolioResponse:
    """Cash balance and open positions."""
    view = engine.get_portfolio(account_id)
    return PortfolioResponse(
        account_id=view.account_id,
        cash_balance=view.cash_balance,
        positions=[PositionResponse.model_validate(p) for p in view.positions],
    )
