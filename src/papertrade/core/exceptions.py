"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class AccountNotFoundError(NotFoundError):
    """Raised when a trade or lookup names an account that does not exist."""

    def __init__(self, account_id: str):
        super().__init__("Account", account_id)
        self.code = "ACCOUNT_NOT_FOUND"


class InvalidTradeError(AppError):
    """Raised for non-positive share counts or malformed symbols."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_TRADE")


class InsufficientFundsError(AppError):
    """Raised when a buy or debit would take cash below zero."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class InsufficientSharesError(AppError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, symbol: str, requested: str, available: str):
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_SHARES",
        )


class TradeTimeoutError(AppError):
    """Raised when a trade cannot commit before its deadline."""

    def __init__(self, account_id: str):
        super().__init__(
            f"Trade for account {account_id} did not complete before its deadline",
            code="TRADE_TIMEOUT",
        )


class FanoutAttemptFailed(AppError):
    """Wraps the failure of one follower's copy trade."""

    def __init__(self, follower_account_id: str, cause: Exception):
        reason = getattr(cause, "message", None) or str(cause) or type(cause).__name__
        super().__init__(
            f"Copy trade for follower {follower_account_id} failed: {reason}",
            code="FANOUT_ATTEMPT_FAILED",
        )
        self.follower_account_id = follower_account_id
        self.cause = cause
