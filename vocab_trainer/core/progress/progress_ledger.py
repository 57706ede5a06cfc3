"""
Daily review counters for progress display
"""

import logging
from datetime import date, datetime

from ...utils import format_date_key
from ..database.models import ProgressDay

logger = logging.getLogger(__name__)

DAYS_RETAINED = 7


class ProgressLedger:
    """One counter per calendar day, keeping the most recent days"""

    def __init__(self, days: list[ProgressDay] | None = None, days_retained: int = DAYS_RETAINED):
        self._days: list[ProgressDay] = days if days is not None else []
        self.days_retained = days_retained

    def day_key(self, day: date) -> str:
        return format_date_key(day)

    def record(self, now: datetime | None = None) -> ProgressDay:
        """Count one review for the day of `now`"""
        now = now or datetime.now()
        key = self.day_key(now.date())

        entry = self._find(key)
        if entry is not None:
            entry.review_count += 1
        else:
            entry = ProgressDay(date_key=key, review_count=1)
            self._days.append(entry)

        self._evict(now.date())
        return entry

    def _find(self, key: str) -> ProgressDay | None:
        for day in self._days:
            if day.date_key == key:
                return day
        return None

    def _evict(self, today: date) -> None:
        if len(self._days) > self.days_retained:
            dropped = self._days[: len(self._days) - self.days_retained]
            del self._days[: len(self._days) - self.days_retained]
            logger.debug(f"Evicted progress days: {[d.date_key for d in dropped]}")

    def days(self) -> list[ProgressDay]:
        return list(self._days)

    def count_for(self, day: date) -> int:
        entry = self._find(self.day_key(day))
        return entry.review_count if entry else 0

    def total(self) -> int:
        return sum(day.review_count for day in self._days)

    def clear(self) -> None:
        self._days.clear()


class WeeklyProgressLedger(ProgressLedger):
    """Stricter variant: per-day counters for the current ISO week only"""

    def day_key(self, day: date) -> str:
        year, week, weekday = day.isocalendar()
        return f"{year}-W{week:02d}-{weekday}"

    @staticmethod
    def _week_prefix(key: str) -> str:
        return key.rsplit("-", 1)[0]

    def _evict(self, today: date) -> None:
        current_week = self._week_prefix(self.day_key(today))
        stale = [d for d in self._days if self._week_prefix(d.date_key) != current_week]
        if stale:
            self._days[:] = [d for d in self._days if d not in stale]
            logger.debug(f"Dropped {len(stale)} days from previous weeks")


def create_ledger(
    strategy: str, days: list[ProgressDay] | None = None, days_retained: int = DAYS_RETAINED
) -> ProgressLedger:
    """Ledger for the configured progress strategy"""
    if strategy == "weekly":
        return WeeklyProgressLedger(days, days_retained)
    if strategy == "daily":
        return ProgressLedger(days, days_retained)
    raise ValueError(f"Unknown progress strategy: {strategy}")
