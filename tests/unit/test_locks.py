"""
Unit tests for AccountLockRegistry.

Tests cover:
- Same-account exclusion with acquire timeouts
- Independence of different accounts
- Locks released from the registry once idle
"""

import gc
import threading

import pytest

from papertrade.services.locks import AccountLockRegistry
from papertrade.core.exceptions import TradeTimeoutError


class TestHold:
    """Tests for holding account locks."""

    def test_second_holder_times_out(self):
        """
        GIVEN account A's lock held by one caller
        WHEN another caller asks for it with a short timeout
        THEN TradeTimeoutError is raised
        """
        registry = AccountLockRegistry()

        with registry.hold("A"):
            with pytest.raises(TradeTimeoutError):
                with registry.hold("A", timeout=0.05):
                    pass

    def test_different_accounts_do_not_contend(self):
        """
        GIVEN account A's lock held
        WHEN account B's lock is requested without waiting
        THEN it is acquired
        """
        registry = AccountLockRegistry()

        with registry.hold("A"):
            with registry.hold("B", timeout=0):
                assert len(registry) == 2

    def test_waiter_acquires_after_release(self):
        """
        GIVEN account A's lock held by another thread for a moment
        WHEN this thread waits on it
        THEN it acquires the lock once the holder releases
        """
        registry = AccountLockRegistry()
        held = threading.Event()
        release = threading.Event()

        def holder():
            with registry.hold("A"):
                held.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=holder)
        thread.start()
        held.wait(timeout=5)
        threading.Timer(0.05, release.set).start()

        with registry.hold("A", timeout=5):
            pass
        thread.join(timeout=5)


class TestRegistrySize:
    """Tests for registry growth."""

    def test_idle_locks_are_dropped(self):
        """
        GIVEN 100 accounts that each traded once
        WHEN no caller holds or waits on any lock
        THEN the registry tracks no locks
        """
        registry = AccountLockRegistry()

        for i in range(100):
            with registry.hold(f"account-{i}"):
                pass
        gc.collect()

        assert len(registry) == 0

    def test_held_lock_is_tracked(self):
        """
        GIVEN account A's lock held
        WHEN the registry is inspected
        THEN exactly one lock is tracked
        """
        registry = AccountLockRegistry()

        with registry.hold("A"):
            gc.collect()
            assert len(registry) == 1
