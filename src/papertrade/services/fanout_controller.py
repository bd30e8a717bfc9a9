"""Copy-trade fanout: replicate a trader's trade into followers' portfolios."""

import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import Decimal
from typing import Optional

from papertrade.core.timezone import now_eastern
from papertrade.core.money import truncate_shares
from papertrade.core.exceptions import FanoutAttemptFailed
from papertrade.domain.models import (
    Account,
    CopiedTrade,
    CopySetting,
    CopyTradeStatus,
    Transaction,
)
from papertrade.domain.views import FanoutOutcome, FanoutReport, TradeRequest
from papertrade.repositories.protocols import UnitOfWorkFactory
from papertrade.services.trade_engine import TradeEngine

logger = logging.getLogger(__name__)

DEFAULT_FANOUT_TIMEOUT_SECONDS = 5.0
DEFAULT_FANOUT_MAX_WORKERS = 8


def compute_copy_shares(setting: CopySetting, original: Transaction) -> Decimal:
    """
    Scale the original trade down to the follower's budget.

    copy_amount = min(copy_amount_cash, max_position_size_cash, shares * price),
    then copy_shares = copy_amount / price truncated to six places.
    """
    copy_amount = min(
        setting.copy_amount_cash,
        setting.max_position_size_cash,
        original.shares * original.price,
    )
    return truncate_shares(copy_amount / original.price)


def select_setting(settings: list[CopySetting], trader_id: str) -> Optional[CopySetting]:
    """First enabled setting targeting ``trader_id``, in storage order."""
    for setting in settings:
        if setting.enabled and setting.followed_trader_id == trader_id:
            return setting
    return None


class FanoutController:
    """
    Fans one executed trader transaction out to every eligible follower.

    Each follower attempt runs on its own worker thread with its own unit of
    work and deadline. Attempts are joined without short-circuiting; a
    follower's failure is recorded on its CopiedTrade and logged, never
    raised to the trader or to sibling attempts.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        trade_engine: TradeEngine,
        timeout_seconds: float = DEFAULT_FANOUT_TIMEOUT_SECONDS,
        max_workers: int = DEFAULT_FANOUT_MAX_WORKERS,
    ):
        self._uow_factory = uow_factory
        self._engine = trade_engine
        self._timeout = timeout_seconds
        self._max_workers = max(1, max_workers)

    def fanout(self, original: Transaction, acting_account: Account) -> FanoutReport:
        """Copy ``original`` to followers of ``acting_account`` (traders only)."""
        report = FanoutReport(original_txn_id=original.txn_id)
        if not acting_account.is_trader:
            return report

        try:
            with self._uow_factory() as uow:
                edges = uow.social.followers_of(acting_account.account_id)
        except Exception:
            logger.exception("Could not load followers of trader %s", acting_account.account_id)
            return report

        if not edges:
            return report

        workers = min(self._max_workers, len(edges))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fanout") as executor:
            futures = [
                executor.submit(
                    self._run_attempt,
                    original,
                    edge.follower_account_id,
                    acting_account.account_id,
                )
                for edge in edges
            ]
            for future in as_completed(futures):
                outcome = future.result()
                if outcome is not None:
                    report.outcomes.append(outcome)

        logger.info(
            "Fanout of txn %s: %d executed, %d failed, %d followers skipped",
            original.txn_id,
            report.executed_count,
            report.failed_count,
            len(edges) - len(report.outcomes),
        )
        return report

    def _run_attempt(
        self,
        original: Transaction,
        follower_id: str,
        trader_id: str,
    ) -> Optional[FanoutOutcome]:
        # Worker boundary: nothing escapes into the executor
        try:
            return self._attempt(original, follower_id, trader_id)
        except Exception:
            logger.exception("Copy attempt for follower %s could not be recorded", follower_id)
            return None

    def _attempt(
        self,
        original: Transaction,
        follower_id: str,
        trader_id: str,
    ) -> Optional[FanoutOutcome]:
        deadline = time.monotonic() + self._timeout
        copied: Optional[CopiedTrade] = None

        try:
            with self._uow_factory() as uow:
                setting = select_setting(uow.copy_trades.settings_for(follower_id), trader_id)
            if setting is None:
                logger.debug("Follower %s has no enabled copy setting for %s", follower_id, trader_id)
                return None

            copied = self._record_pending(original, follower_id, setting)

            follower_txn = self._engine.execute(
                follower_id,
                TradeRequest(
                    symbol=original.symbol,
                    shares=copied.copied_shares,
                    side=original.side,
                ),
                deadline=deadline,
            )
        except Exception as exc:
            if copied is None:
                raise
            failure = FanoutAttemptFailed(follower_id, exc)
            logger.warning("%s (txn %s)", failure.message, original.txn_id)
            copied.status = CopyTradeStatus.FAILED
            copied.error = failure.message
            return self._finalize(copied)

        copied.status = CopyTradeStatus.EXECUTED
        copied.copied_price = follower_txn.price
        copied.follower_txn_id = follower_txn.txn_id
        return self._finalize(copied)

    def _record_pending(
        self,
        original: Transaction,
        follower_id: str,
        setting: CopySetting,
    ) -> CopiedTrade:
        with self._uow_factory() as uow:
            copied = uow.copy_trades.append_copied_trade(
                CopiedTrade(
                    copied_trade_id=str(uuid.uuid4()),
                    original_txn_id=original.txn_id,
                    follower_account_id=follower_id,
                    setting_id=setting.setting_id,
                    status=CopyTradeStatus.PENDING,
                    copied_shares=compute_copy_shares(setting, original),
                    copied_price=original.price,
                    created_at=now_eastern(),
                )
            )
            uow.commit()
        return copied

    def _finalize(self, copied: CopiedTrade) -> FanoutOutcome:
        copied.completed_at = now_eastern()
        with self._uow_factory() as uow:
            uow.copy_trades.finalize_copied_trade(copied)
            uow.commit()
        return FanoutOutcome(
            follower_account_id=copied.follower_account_id,
            copied_trade_id=copied.copied_trade_id,
            status=copied.status,
            error=copied.error,
        )
