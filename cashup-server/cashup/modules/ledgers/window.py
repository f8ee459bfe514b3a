"""Local calendar day boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo


@dataclass(frozen=True, slots=True)
class DayWindow:
    """``[start, end)`` in UTC covering one calendar day in ``tz``."""

    day: date
    start: datetime
    end: datetime
    tz: tzinfo

    def contains(self, moment: datetime) -> bool:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return self.start <= moment < self.end


def day_window(day: date, tz: tzinfo) -> DayWindow:
    """Window from local midnight of ``day`` to the following local midnight.

    DST transitions make some days 23 or 25 hours long; the UTC bounds follow.
    """
    local_start = datetime.combine(day, time.min, tzinfo=tz)
    local_end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return DayWindow(
        day=day,
        start=local_start.astimezone(timezone.utc),
        end=local_end.astimezone(timezone.utc),
        tz=tz,
    )
