"""Trade orchestration: the acting account's trade, then copy-trade fanout."""

import logging

from papertrade.domain.models import Transaction
from papertrade.domain.views import FanoutReport, TradeRequest, TradeResult
from papertrade.repositories.protocols import UnitOfWorkFactory
from papertrade.services.trade_engine import TradeEngine
from papertrade.services.fanout_controller import FanoutController

logger = logging.getLogger(__name__)


class TradingService:
    """
    Entry point for user-initiated trades.

    Errors from the acting account's own trade propagate to the caller.
    Fanout runs only after that trade has committed and never raises.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        trade_engine: TradeEngine,
        fanout_controller: FanoutController,
    ):
        self._uow_factory = uow_factory
        self._engine = trade_engine
        self._fanout = fanout_controller

    def place_trade(
        self,
        account_id: str,
        request: TradeRequest,
        run_fanout: bool = True,
    ) -> TradeResult:
        """
        Execute a trade for ``account_id``.

        With ``run_fanout`` the copy trades are processed before returning;
        otherwise the caller is expected to call ``fanout_for`` later.
        """
        transaction = self._engine.execute(account_id, request)
        report = self.fanout_for(transaction) if run_fanout else None
        return TradeResult(transaction=transaction, fanout=report)

    def fanout_for(self, transaction: Transaction) -> FanoutReport:
        """Run copy-trade fanout for a committed transaction."""
        try:
            with self._uow_factory() as uow:
                actor = uow.accounts.get_by_id(transaction.account_id)
        except Exception:
            logger.exception("Could not load account %s for fanout", transaction.account_id)
            return FanoutReport(original_txn_id=transaction.txn_id)

        if actor is None or not actor.is_trader:
            return FanoutReport(original_txn_id=transaction.txn_id)
        return self._fanout.fanout(transaction, actor)
