"""
Spaced repetition scheduling with a fixed escalating interval ladder
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from .config import get_settings
from .core.database.models import MAX_DIFFICULTY, LearningItem, ReviewStats

logger = logging.getLogger(__name__)


class PracticeMode(Enum):
    """Which learning items count as due"""

    SCHEDULED = "scheduled"  # Respects due dates
    ENDLESS = "endless"  # All unlearned items

    @classmethod
    def parse(cls, value: "PracticeMode | str") -> "PracticeMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown practice mode: {value}") from None


class WordState(Enum):
    """Review state of a single word"""

    UNSEEN = "unseen"
    DUE = "due"
    NOT_DUE = "not_due"
    LEARNED = "learned"


@dataclass
class ReviewResult:
    """Result of a recorded review"""

    correct: bool
    interval: timedelta
    next_due_at: datetime
    difficulty: int


class ReviewScheduler:
    """Owns review statistics and decides which words are due"""

    def __init__(
        self,
        stats: dict[str, ReviewStats] | None = None,
        intervals_minutes: list[int] | None = None,
        retry_minutes: int | None = None,
        max_difficulty: int | None = None,
    ):
        settings = get_settings()
        self.stats: dict[str, ReviewStats] = stats if stats is not None else {}
        self.intervals = [
            timedelta(minutes=m)
            for m in (intervals_minutes or settings.review_intervals_minutes)
        ]
        self.retry_interval = timedelta(
            minutes=retry_minutes if retry_minutes is not None else settings.incorrect_retry_minutes
        )
        if max_difficulty is None:
            max_difficulty = settings.max_difficulty
        # Stored stats only accept difficulty within 0..MAX_DIFFICULTY
        self.max_difficulty = min(max(max_difficulty, 0), MAX_DIFFICULTY)

    def get_stats(self, headword: str) -> ReviewStats | None:
        return self.stats.get(headword)

    def ensure_stats(self, headword: str, now: datetime | None = None) -> ReviewStats:
        """Create stats for a word if absent; the new word is immediately due"""
        existing = self.stats.get(headword)
        if existing is not None:
            return existing

        stats = ReviewStats(next_due_at=now or datetime.now())
        self.stats[headword] = stats
        logger.debug(f"Initialized review stats for '{headword}'")
        return stats

    def is_due(self, item: LearningItem, now: datetime) -> bool:
        """Unlearned and either never scheduled or past its due time"""
        if item.is_learned:
            return False
        stats = self.stats.get(item.headword)
        if stats is None:
            return True
        return stats.next_due_at <= now

    def due_items(
        self,
        items: Iterable[LearningItem],
        practice_mode: PracticeMode | str = PracticeMode.SCHEDULED,
        now: datetime | None = None,
    ) -> list[LearningItem]:
        """
        Select the items eligible for review, keeping their original order

        Args:
            items: Learning items to filter
            practice_mode: SCHEDULED respects due dates, ENDLESS ignores them
            now: Reference time (defaults to now)

        Returns:
            List of due items
        """
        mode = PracticeMode.parse(practice_mode)
        if mode is PracticeMode.ENDLESS:
            return [item for item in items if not item.is_learned]

        now = now or datetime.now()
        return [item for item in items if self.is_due(item, now)]

    def calculate_interval(self, correct_count: int, correct: bool) -> timedelta:
        """Interval from the ladder, indexed by lifetime correct answers"""
        if not correct:
            return self.retry_interval
        index = min(max(correct_count - 1, 0), len(self.intervals) - 1)
        return self.intervals[index]

    def record_answer(
        self, headword: str, correct: bool, now: datetime | None = None
    ) -> ReviewResult:
        """Apply a review outcome to the word's stats"""
        now = now or datetime.now()
        stats = self.ensure_stats(headword, now)
        stats.last_reviewed_at = now

        if correct:
            stats.correct_count += 1
            stats.difficulty = max(0, stats.difficulty - 1)
        else:
            stats.incorrect_count += 1
            stats.difficulty = min(self.max_difficulty, stats.difficulty + 1)

        interval = self.calculate_interval(stats.correct_count, correct)
        stats.next_due_at = now + interval

        logger.info(
            f"Review '{headword}': correct={correct}, "
            f"correct_count={stats.correct_count}, incorrect_count={stats.incorrect_count}, "
            f"difficulty={stats.difficulty}, next={stats.next_due_at.isoformat()}"
        )

        return ReviewResult(
            correct=correct,
            interval=interval,
            next_due_at=stats.next_due_at,
            difficulty=stats.difficulty,
        )

    def word_state(self, item: LearningItem, now: datetime | None = None) -> WordState:
        """Where the word sits in the review cycle"""
        if item.is_learned:
            return WordState.LEARNED
        stats = self.stats.get(item.headword)
        if stats is None or stats.last_reviewed_at is None:
            # Never answered, so it is reviewable right away
            return WordState.UNSEEN
        if stats.next_due_at <= (now or datetime.now()):
            return WordState.DUE
        return WordState.NOT_DUE

    def clear(self) -> None:
        self.stats.clear()


def calculate_next_due(
    correct_count: int, correct: bool, now: datetime | None = None
) -> datetime:
    """Convenience function: next due time under the configured ladder"""
    scheduler = ReviewScheduler()
    now = now or datetime.now()
    return now + scheduler.calculate_interval(correct_count, correct)
