"""Stub price oracles for offline and test use."""

import random
import threading
from decimal import Decimal
from typing import Mapping, Optional

from papertrade.core.exceptions import InvalidTradeError
from papertrade.core.money import to_cents

# Mock trade prices fall between these bounds
MIN_STUB_PRICE = Decimal("10.00")
MAX_STUB_PRICE = Decimal("100.00")


class StubPriceOracle:
    """
    Mock oracle returning a random price between $10 and $100 per quote.

    Pass a seed for reproducible sequences.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def quote(self, symbol: str) -> Decimal:
        """Return a fresh random price, rounded to cents."""
        with self._lock:
            fraction = Decimal(str(self._rng.random()))
        return to_cents(MIN_STUB_PRICE + fraction * (MAX_STUB_PRICE - MIN_STUB_PRICE))


class FixedPriceOracle:
    """Deterministic oracle backed by a symbol -> price mapping."""

    def __init__(self, prices: Mapping[str, Decimal]):
        self._prices = {symbol.upper(): Decimal(price) for symbol, price in prices.items()}

    def set_price(self, symbol: str, price: Decimal) -> None:
        self._prices[symbol.upper()] = Decimal(price)

    def quote(self, symbol: str) -> Decimal:
        try:
            return self._prices[symbol.upper()]
        except KeyError:
            raise InvalidTradeError(f"No price available for symbol {symbol}") from None
