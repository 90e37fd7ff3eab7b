# File: common/utils/date_utils.py

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Returns current UTC time as aware datetime."""
    return datetime.now(timezone.utc)


def add_minutes(base: Optional[datetime], minutes: int) -> datetime:
    """Adds minutes to given datetime (or now)."""
    base_time = base or utc_now()
    return base_time + timedelta(minutes=minutes)


def seconds_until(moment: datetime, now: Optional[datetime] = None) -> float:
    """Seconds left until `moment`; negative once it has passed."""
    return (moment - (now or utc_now())).total_seconds()
