"""Per-account mutual exclusion for ledger mutations."""

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator, Optional

from papertrade.core.exceptions import TradeTimeoutError


class AccountLockRegistry:
    """
    Hands out one lock per account ID.

    Trades against the same account serialize on its lock; trades against
    different accounts never contend. A lock lives only while some caller
    holds or waits on it.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
        self._guard = threading.Lock()

    def _lock_for(self, account_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(account_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[account_id] = lock
            return lock

    def __len__(self) -> int:
        """Number of accounts with a live lock."""
        return len(self._locks)

    @contextmanager
    def hold(self, account_id: str, timeout: Optional[float] = None) -> Iterator[None]:
        """
        Hold the account's lock for the duration of the block.

        Raises TradeTimeoutError if the lock is not acquired within ``timeout``
        seconds (None waits forever).
        """
        lock = self._lock_for(account_id)
        acquired = lock.acquire(timeout=-1 if timeout is None else max(timeout, 0.0))
        if not acquired:
            raise TradeTimeoutError(account_id)
        try:
            yield
        finally:
            lock.release()


# Process-wide registry shared by every TradeEngine instance
_registry: Optional[AccountLockRegistry] = None
_registry_guard = threading.Lock()


def get_lock_registry() -> AccountLockRegistry:
    """Return the process-wide lock registry."""
    global _registry
    with _registry_guard:
        if _registry is None:
            _registry = AccountLockRegistry()
        return _registry
