"""Price oracle protocol."""

from decimal import Decimal
from typing import Protocol


class PriceOracle(Protocol):
    """
    Protocol for trade price sources.

    Implementations return the current trade price for a symbol as a
    positive Decimal. No further contract is assumed (mock or real feed).
    """

    def quote(self, symbol: str) -> Decimal:
        """Return the current trade price for ``symbol``."""
        ...
