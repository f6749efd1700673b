"""Calendar-week boundaries used to bucket review records."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

# datetime.weekday() -> days elapsed since the most recent Monday.
# Sunday closes the week that began six days earlier (ISO 8601).
DAYS_SINCE_MONDAY: Dict[int, int] = {
    0: 0,  # Monday
    1: 1,  # Tuesday
    2: 2,  # Wednesday
    3: 3,  # Thursday
    4: 4,  # Friday
    5: 5,  # Saturday
    6: 6,  # Sunday
}

ONE_WEEK = timedelta(days=7)


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval ``[start, end)``; ``end=None`` leaves it unbounded."""

    start: datetime
    end: Optional[datetime] = None

    def __contains__(self, moment: datetime) -> bool:
        if moment < self.start:
            return False
        return self.end is None or moment < self.end


def start_of_week(now: datetime) -> datetime:
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=DAYS_SINCE_MONDAY[midnight.weekday()])


def current_week(now: datetime) -> TimeWindow:
    return TimeWindow(start=start_of_week(now))


def previous_week(now: datetime) -> TimeWindow:
    start = start_of_week(now)
    return TimeWindow(start=start - ONE_WEEK, end=start)
