"""
Multiple-choice question generation with unique, plausible distractors
"""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .core.database.models import LearningItem, WordEntry
from .utils import RandomSource, display_of, shuffle

logger = logging.getLogger(__name__)

DEFAULT_OPTION_COUNT = 4


class QuizDirection(Enum):
    """Which language is shown as the prompt"""

    EN_RU = "EN_RU"  # Prompt in English, answer is the translation
    RU_EN = "RU_EN"  # Prompt is the translation, answer in English


@dataclass
class QuizQuestion:
    """One multiple-choice question; options[0] is always the correct answer"""

    headword: str
    direction: QuizDirection
    prompt: str
    correct_answer: str
    options: list[str] = field(default_factory=list)

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer


def answer_for(word: LearningItem | WordEntry, direction: QuizDirection) -> str:
    """Direction-appropriate answer text for a word"""
    if direction is QuizDirection.EN_RU:
        return word.translation
    return display_of(word)


def prompt_for(word: LearningItem | WordEntry, direction: QuizDirection) -> str:
    if direction is QuizDirection.EN_RU:
        return display_of(word)
    return word.translation


class QuizGenerator:
    """Builds quiz questions from the learning set with bank fallback"""

    def __init__(
        self,
        rng: RandomSource | None = None,
        option_count: int = DEFAULT_OPTION_COUNT,
    ):
        self.rng = rng or random.Random()
        self.option_count = option_count

    def choose_direction(self) -> QuizDirection:
        return QuizDirection.EN_RU if self.rng.random() < 0.5 else QuizDirection.RU_EN

    def build_question(
        self,
        target: LearningItem,
        pool: Sequence[LearningItem],
        fallback_pool: Sequence[Sequence[WordEntry]] = (),
        direction: QuizDirection | None = None,
    ) -> QuizQuestion:
        """
        Build a question for the target word

        Args:
            target: Word being asked
            pool: User's full learning set, the primary distractor source
            fallback_pool: Word bank categories in fallback order
            direction: Force a direction instead of picking one at random

        Returns:
            QuizQuestion with at most option_count unique options
        """
        direction = direction or self.choose_direction()
        correct_answer = answer_for(target, direction)
        options = self.build_options(target, direction, pool, fallback_pool)

        if len(options) < self.option_count:
            logger.info(
                f"Only {len(options)} options available for '{target.headword}'"
            )

        return QuizQuestion(
            headword=target.headword,
            direction=direction,
            prompt=prompt_for(target, direction),
            correct_answer=correct_answer,
            options=options,
        )

    def build_options(
        self,
        target: LearningItem,
        direction: QuizDirection,
        pool: Sequence[LearningItem],
        fallback_pool: Sequence[Sequence[WordEntry]] = (),
    ) -> list[str]:
        """Correct answer first, then unique distractors"""
        options = [answer_for(target, direction)]

        self._collect(options, target, direction, pool)
        for category in fallback_pool:
            if len(options) >= self.option_count:
                break
            self._collect(options, target, direction, category)

        return options[: self.option_count]

    def _collect(
        self,
        options: list[str],
        target: LearningItem,
        direction: QuizDirection,
        candidates: Sequence[LearningItem | WordEntry],
    ) -> None:
        for candidate in shuffle(list(candidates), self.rng):
            if len(options) >= self.option_count:
                return
            if candidate.headword == target.headword:
                continue
            wrong_option = answer_for(candidate, direction)
            if wrong_option and wrong_option not in options:
                options.append(wrong_option)

    def shuffle_options(self, question: QuizQuestion) -> list[str]:
        """Presentation order for the options"""
        return shuffle(question.options, self.rng)
