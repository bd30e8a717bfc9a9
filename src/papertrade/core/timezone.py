"""Timezone utilities for US/Eastern market time."""

from datetime import datetime
from typing import Optional

import pytz

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def as_eastern(dt: Optional[datetime]) -> Optional[datetime]:
    """Eastern-aware datetime for values read back from the database."""
    return to_eastern(dt) if dt is not None else None
