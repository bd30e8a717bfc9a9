"""Price oracle providers."""

from papertrade.providers.price_oracle import PriceOracle
from papertrade.providers.stub_oracle import StubPriceOracle, FixedPriceOracle

__all__ = [
    "PriceOracle",
    "StubPriceOracle",
    "FixedPriceOracle",
]
