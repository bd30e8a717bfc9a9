"""Copy trading repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import CopySetting, CopiedTrade


class CopyTradeRepository(Protocol):
    """Interface for copy settings and copied trade outcomes."""

    # Settings
    def create_setting(self, setting: CopySetting) -> CopySetting:
        """Persist a new copy setting."""
        ...

    def get_setting(self, setting_id: str) -> Optional[CopySetting]:
        """Retrieve a setting by ID."""
        ...

    def update_setting(self, setting: CopySetting) -> CopySetting:
        """Persist changes to a setting."""
        ...

    def settings_for(self, follower_account_id: str) -> list[CopySetting]:
        """List a follower's settings, oldest first."""
        ...

    # Copied trades
    def append_copied_trade(self, copied_trade: CopiedTrade) -> CopiedTrade:
        """Record a new fanout attempt."""
        ...

    def get_copied_trade(self, copied_trade_id: str) -> Optional[CopiedTrade]:
        """Retrieve a copied trade by ID."""
        ...

    def finalize_copied_trade(self, copied_trade: CopiedTrade) -> CopiedTrade:
        """Write the terminal status of a pending attempt."""
        ...

    def list_copied_trades(self, follower_account_id: str) -> list[CopiedTrade]:
        """List a follower's copied trades, newest first."""
        ...

    def list_by_original(self, original_txn_id: str) -> list[CopiedTrade]:
        """List all attempts spawned by one trader transaction."""
        ...
