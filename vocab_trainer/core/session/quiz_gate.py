"""
Quiz gates: short quizzes that must be passed before (or during) a game
"""

import logging
from datetime import datetime

from ...quiz_generator import QuizGenerator, QuizQuestion
from ...word_bank import WordBank
from ..database.models import LearningItem
from ..learning.learning_set_store import LearningSetStore
from ..progress.progress_ledger import ProgressLedger

logger = logging.getLogger(__name__)


class QuizGate:
    """Asks questions on random unlearned words until enough are answered right"""

    def __init__(
        self,
        name: str,
        store: LearningSetStore,
        generator: QuizGenerator,
        ledger: ProgressLedger,
        required_correct: int,
        word_bank: WordBank | None = None,
    ):
        self.name = name
        self.store = store
        self.generator = generator
        self.ledger = ledger
        self.required_correct = required_correct
        self.word_bank = word_bank or store.word_bank
        self.correct_count = 0
        self.current_question: QuizQuestion | None = None
        self.current_item: LearningItem | None = None

    @property
    def passed(self) -> bool:
        return self.correct_count >= self.required_correct

    def next_question(self) -> QuizQuestion | None:
        """New question on a random unlearned word; None if there is none"""
        item = self.store.random_unlearned(self.generator.rng)
        if item is None:
            self.current_item = None
            self.current_question = None
            return None

        question = self.generator.build_question(
            item, self.store.items, self.word_bank.fallback_pool()
        )
        self.current_item = item
        self.current_question = question
        return question

    def answer(self, selected: str, now: datetime | None = None) -> bool:
        """
        Check an answer to the current question

        Correct answers count toward the gate and are recorded as
        progress; review stats are not touched.
        """
        if self.current_question is None:
            raise ValueError("No question to answer")

        is_correct = self.current_question.is_correct(selected)
        if is_correct:
            self.correct_count += 1
            self.ledger.record(now)

        logger.info(
            f"Gate '{self.name}': answer correct={is_correct}, "
            f"{self.correct_count}/{self.required_correct}"
        )
        return is_correct
