"""
Unit tests for the review scheduler
"""

from datetime import timedelta

import pytest

from vocab_trainer.core.database.models import LearningItem, ReviewStats
from vocab_trainer.spaced_repetition import (
    PracticeMode,
    ReviewResult,
    ReviewScheduler,
    WordState,
    calculate_next_due,
)


def make_item(headword, level="A1", is_learned=False):
    return LearningItem(headword=headword, translation="перевод", level=level, is_learned=is_learned)


class TestPracticeMode:
    """Test PracticeMode parsing"""

    def test_parse_values(self):
        assert PracticeMode.parse("scheduled") is PracticeMode.SCHEDULED
        assert PracticeMode.parse("ENDLESS") is PracticeMode.ENDLESS
        assert PracticeMode.parse(PracticeMode.ENDLESS) is PracticeMode.ENDLESS

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            PracticeMode.parse("cram")


class TestReviewScheduler:
    """Test ReviewScheduler class"""

    @pytest.fixture
    def scheduler(self):
        return ReviewScheduler(
            intervals_minutes=[60, 240, 1440, 4320, 10080], retry_minutes=10, max_difficulty=2
        )

    def test_new_word_is_due_immediately(self, scheduler, now):
        """Test that freshly added words are reviewable right away"""
        stats = scheduler.ensure_stats("cat", now)

        assert stats.correct_count == 0
        assert stats.incorrect_count == 0
        assert stats.difficulty == 0
        assert stats.next_due_at == now
        assert scheduler.is_due(make_item("cat"), now)

    def test_ensure_stats_keeps_existing(self, scheduler, now):
        scheduler.record_answer("cat", True, now)
        stats = scheduler.ensure_stats("cat", now + timedelta(days=30))

        assert stats.correct_count == 1
        assert stats.next_due_at == now + timedelta(hours=1)

    def test_word_without_stats_is_due(self, scheduler, now):
        assert scheduler.is_due(make_item("dog"), now)

    def test_correct_answers_climb_the_ladder(self, scheduler, now):
        """Test intervals 1h, 4h, 24h, 3d, 7d and capping at 7d"""
        expected = [
            timedelta(hours=1),
            timedelta(hours=4),
            timedelta(hours=24),
            timedelta(days=3),
            timedelta(days=7),
            timedelta(days=7),
        ]

        for interval in expected:
            result = scheduler.record_answer("cat", True, now)
            assert isinstance(result, ReviewResult)
            assert result.interval == interval
            assert result.next_due_at == now + interval

        assert scheduler.get_stats("cat").correct_count == 6

    def test_incorrect_answer_retries_in_ten_minutes(self, scheduler, now):
        for _ in range(3):
            scheduler.record_answer("cat", True, now)

        result = scheduler.record_answer("cat", False, now)

        stats = scheduler.get_stats("cat")
        assert result.interval == timedelta(minutes=10)
        assert stats.next_due_at == now + timedelta(minutes=10)
        # Lifetime correct count is not reset
        assert stats.correct_count == 3
        assert stats.incorrect_count == 1
        assert stats.last_reviewed_at == now

    def test_difficulty_is_clamped(self, scheduler, now):
        """Test difficulty stays within 0..2"""
        for _ in range(5):
            scheduler.record_answer("cat", False, now)
        assert scheduler.get_stats("cat").difficulty == 2

        for _ in range(5):
            scheduler.record_answer("cat", True, now)
        assert scheduler.get_stats("cat").difficulty == 0

    def test_difficulty_cap_cannot_exceed_stored_range(self, now):
        scheduler = ReviewScheduler(intervals_minutes=[60], retry_minutes=10, max_difficulty=5)

        for _ in range(4):
            result = scheduler.record_answer("cat", False, now)

        assert scheduler.max_difficulty == 2
        assert result.difficulty == 2

    def test_correct_after_incorrect_uses_lifetime_count(self, scheduler, now):
        scheduler.record_answer("cat", True, now)
        scheduler.record_answer("cat", False, now)
        result = scheduler.record_answer("cat", True, now)

        # Second lifetime correct answer
        assert result.interval == timedelta(hours=4)
        assert result.difficulty == 0

    def test_learned_words_are_never_due(self, scheduler, now):
        learned = make_item("cat", is_learned=True)
        scheduler.ensure_stats("cat", now - timedelta(days=1))

        assert not scheduler.is_due(learned, now)
        assert scheduler.due_items([learned], PracticeMode.SCHEDULED, now) == []
        assert scheduler.due_items([learned], PracticeMode.ENDLESS, now) == []

    def test_due_items_scheduled_respects_due_dates(self, scheduler, now):
        items = [make_item("cat"), make_item("dog"), make_item("fox")]
        for item in items:
            scheduler.ensure_stats(item.headword, now)
        scheduler.record_answer("dog", True, now)

        due = scheduler.due_items(items, PracticeMode.SCHEDULED, now)

        assert [item.headword for item in due] == ["cat", "fox"]

    def test_due_items_endless_ignores_due_dates(self, scheduler, now):
        items = [make_item("cat"), make_item("dog"), make_item("owl", is_learned=True)]
        scheduler.record_answer("dog", True, now)

        due = scheduler.due_items(items, "endless", now)

        assert [item.headword for item in due] == ["cat", "dog"]

    def test_word_becomes_due_again(self, scheduler, now):
        item = make_item("cat")
        scheduler.record_answer("cat", True, now)

        assert not scheduler.is_due(item, now + timedelta(minutes=59))
        assert scheduler.is_due(item, now + timedelta(minutes=60))

    def test_word_state_transitions(self, scheduler, now):
        """Test unseen -> not due -> due -> learned"""
        item = make_item("cat")
        assert scheduler.word_state(item, now) is WordState.UNSEEN

        scheduler.ensure_stats("cat", now)
        assert scheduler.word_state(item, now) is WordState.UNSEEN

        scheduler.record_answer("cat", True, now)
        assert scheduler.word_state(item, now) is WordState.NOT_DUE
        assert scheduler.word_state(item, now + timedelta(hours=2)) is WordState.DUE

        item.is_learned = True
        assert scheduler.word_state(item, now) is WordState.LEARNED

    def test_stats_shared_by_headword(self, scheduler, now):
        """Test the same headword at two levels shares one stats record"""
        a1 = make_item("about", level="A1")
        prepositions = make_item("about", level="PREPOSITIONS")

        scheduler.record_answer("about", True, now)

        assert not scheduler.is_due(a1, now)
        assert not scheduler.is_due(prepositions, now)

    def test_uses_provided_stats_dict(self, now):
        stats = {"cat": ReviewStats(next_due_at=now)}
        scheduler = ReviewScheduler(stats=stats, intervals_minutes=[60])

        scheduler.record_answer("dog", True, now)

        assert "dog" in stats

    def test_clear(self, scheduler, now):
        scheduler.record_answer("cat", True, now)
        scheduler.clear()
        assert scheduler.get_stats("cat") is None


class TestCalculateNextDue:
    """Test calculate_next_due convenience function"""

    def test_incorrect(self, now):
        assert calculate_next_due(3, False, now) == now + timedelta(minutes=10)

    def test_first_correct(self, now):
        assert calculate_next_due(1, True, now) == now + timedelta(hours=1)
