"""Calendar arithmetic for deadlines."""

import math
from datetime import date, datetime, time
from typing import Callable, Optional

Clock = Callable[[], datetime]

SECONDS_PER_DAY = 24 * 60 * 60


def days_until(deadline: date, now: datetime) -> int:
    """Whole days left until a deadline, rounded up.

    The deadline counts from its midnight, so a deadline of today
    already returns 0 (or less) once the day has started.
    """
    delta = datetime.combine(deadline, time.min) - now.replace(tzinfo=None)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def parse_deadline(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD deadline (extra time parts ignored)."""
    if not value:
        return None
    text = value.strip()[:10].replace("/", "-").replace(".", "-")
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None
