"""
Tests for daily and weekly progress counters
"""

from datetime import date, datetime, timedelta

import pytest

from vocab_trainer.core.database.models import ProgressDay
from vocab_trainer.core.progress.progress_ledger import (
    ProgressLedger,
    WeeklyProgressLedger,
    create_ledger,
)


class TestProgressLedger:
    """Test ProgressLedger class"""

    def test_record_same_day(self, now):
        ledger = ProgressLedger()

        ledger.record(now)
        entry = ledger.record(now + timedelta(hours=3))

        assert entry.date_key == "2024-03-04"
        assert entry.review_count == 2
        assert len(ledger.days()) == 1
        assert ledger.count_for(date(2024, 3, 4)) == 2

    def test_keeps_last_seven_days(self, now):
        ledger = ProgressLedger()
        for offset in range(8):
            ledger.record(now + timedelta(days=offset))

        keys = [day.date_key for day in ledger.days()]
        assert len(keys) == 7
        assert "2024-03-04" not in keys
        assert keys[-1] == "2024-03-11"
        assert ledger.total() == 7

    def test_custom_retention(self, now):
        ledger = ProgressLedger(days_retained=2)
        for offset in range(4):
            ledger.record(now + timedelta(days=offset))

        assert [day.date_key for day in ledger.days()] == ["2024-03-06", "2024-03-07"]

    def test_mutates_provided_list(self, now):
        days = [ProgressDay(date_key="2024-03-04", review_count=5)]
        ledger = ProgressLedger(days)

        ledger.record(now)

        assert days[0].review_count == 6

    def test_count_for_missing_day(self):
        assert ProgressLedger().count_for(date(2020, 1, 1)) == 0

    def test_clear(self, now):
        days = []
        ledger = ProgressLedger(days)
        ledger.record(now)
        ledger.clear()
        assert days == []


class TestWeeklyProgressLedger:
    """Test WeeklyProgressLedger class"""

    def test_day_key_format(self):
        ledger = WeeklyProgressLedger()
        assert ledger.day_key(date(2024, 1, 1)) == "2024-W01-1"
        assert ledger.day_key(date(2024, 1, 7)) == "2024-W01-7"

    def test_keeps_only_current_week(self):
        ledger = WeeklyProgressLedger()
        ledger.record(datetime(2024, 1, 2, 9, 0))
        ledger.record(datetime(2024, 1, 5, 9, 0))
        assert len(ledger.days()) == 2

        ledger.record(datetime(2024, 1, 8, 9, 0))

        assert [day.date_key for day in ledger.days()] == ["2024-W02-1"]


class TestCreateLedger:
    """Test ledger factory"""

    def test_strategies(self):
        assert type(create_ledger("daily")) is ProgressLedger
        assert type(create_ledger("weekly")) is WeeklyProgressLedger

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            create_ledger("monthly")
