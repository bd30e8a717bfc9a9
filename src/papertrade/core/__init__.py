"""Core utilities and shared functionality."""

from papertrade.core.timezone import now_eastern, to_eastern, as_eastern, EASTERN_TZ
from papertrade.core.money import CENT, SHARE_QUANTUM, to_cents, to_shares, truncate_shares
from papertrade.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    AccountNotFoundError,
    InvalidTradeError,
    InsufficientFundsError,
    InsufficientSharesError,
    TradeTimeoutError,
    FanoutAttemptFailed,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "as_eastern",
    "EASTERN_TZ",
    "CENT",
    "SHARE_QUANTUM",
    "to_cents",
    "to_shares",
    "truncate_shares",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "AccountNotFoundError",
    "InvalidTradeError",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "TradeTimeoutError",
    "FanoutAttemptFailed",
]
