"""
Review session management: position within the due set across review modes
"""

import logging
from datetime import datetime
from enum import Enum

from ...spaced_repetition import PracticeMode, ReviewScheduler
from ...utils import Timer, calculate_success_rate
from ..database.models import LearningItem
from ..learning.learning_set_store import LearningSetStore

logger = logging.getLogger(__name__)


class ReviewMode(Enum):
    """How due words are presented"""

    FLASHCARDS = "flashcards"
    QUIZ = "quiz"
    LIST = "list"

    @classmethod
    def parse(cls, value: "ReviewMode | str") -> "ReviewMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown review mode: {value}") from None


class SessionController:
    """Drives the review loop's current position"""

    def __init__(
        self,
        store: LearningSetStore,
        scheduler: ReviewScheduler,
        mode: ReviewMode | str = ReviewMode.FLASHCARDS,
        practice_mode: PracticeMode | str = PracticeMode.SCHEDULED,
    ):
        self.store = store
        self.scheduler = scheduler
        self.mode = ReviewMode.parse(mode)
        self.practice_mode = PracticeMode.parse(practice_mode)
        self.review_index = 0
        self.correct_answers = 0
        self.total_answers = 0
        self.timer = Timer()
        self.timer.start()

    def set_mode(self, mode: ReviewMode | str) -> ReviewMode:
        self.mode = ReviewMode.parse(mode)
        return self.mode

    def set_practice_mode(self, practice_mode: PracticeMode | str) -> PracticeMode:
        self.practice_mode = PracticeMode.parse(practice_mode)
        return self.practice_mode

    def current_due_set(self, now: datetime | None = None) -> list[LearningItem]:
        """Due items under the active practice mode"""
        return self.scheduler.due_items(self.store.items, self.practice_mode, now)

    def current_item(self, now: datetime | None = None) -> LearningItem | None:
        """Active item, or None when nothing is due"""
        due = self.current_due_set(now)
        if not due:
            return None
        return due[self.review_index % len(due)]

    def position(self, now: datetime | None = None) -> tuple[int, int]:
        """1-based card number and due set size"""
        return self.review_index + 1, len(self.current_due_set(now))

    def list_items(self, now: datetime | None = None) -> list[LearningItem]:
        """Items for list mode"""
        if self.practice_mode is PracticeMode.ENDLESS:
            return self.store.unlearned()
        return self.current_due_set(now)

    def advance(self, due_count: int | None = None, now: datetime | None = None) -> bool:
        """
        Move to the next item

        Args:
            due_count: Due set size captured before the answer was recorded;
                computed fresh when omitted

        Returns:
            True when a scheduled round has just been completed
        """
        if due_count is None:
            due_count = len(self.current_due_set(now))

        self.review_index += 1

        # Endless practice never wraps; the index is reduced modulo at read time
        if self.practice_mode is PracticeMode.SCHEDULED and self.review_index >= due_count:
            self.review_index = 0
            logger.info("Review round complete")
            return True
        return False

    def record_answer(self, correct: bool) -> None:
        """Record an answer for session statistics"""
        self.total_answers += 1
        if correct:
            self.correct_answers += 1

    @property
    def accuracy(self) -> float:
        return calculate_success_rate(self.correct_answers, self.total_answers)

    @property
    def elapsed_seconds(self) -> float:
        """Time since the session started or was last reset"""
        return self.timer.get_elapsed_time()

    def reset(self) -> None:
        self.review_index = 0
        self.correct_answers = 0
        self.total_answers = 0
        self.timer.start()
