"""Fixed-point helpers for cash, prices and share quantities."""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP

CENT = Decimal("0.01")
SHARE_QUANTUM = Decimal("0.000001")
ZERO = Decimal("0")


def to_cents(value: Decimal) -> Decimal:
    """Round a cash amount or price to cents."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_shares(value: Decimal) -> Decimal:
    """Round a share quantity to six fractional digits."""
    return Decimal(value).quantize(SHARE_QUANTUM, rounding=ROUND_HALF_UP)


def truncate_shares(value: Decimal) -> Decimal:
    """Truncate a share quantity to six fractional digits (never rounds up)."""
    return Decimal(value).quantize(SHARE_QUANTUM, rounding=ROUND_DOWN)
