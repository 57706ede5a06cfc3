"""
Vocabulary trainer application service: one explicit context object that
owns all collections and wires the core to its collaborators
"""

import asyncio
import inspect
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .config import Settings, get_settings
from .core.database.models import AppState, LearningItem, ProgressDay
from .core.interfaces import AudioPlayer, LoggingNotifier, Notifier, Persistence, SilentAudioPlayer
from .core.learning.learning_set_store import LearningSetStore
from .core.progress.progress_ledger import create_ledger
from .core.scheduler.quiz_cycle_scheduler import QuizCycleScheduler
from .core.session.quiz_gate import QuizGate
from .core.session.session_controller import ReviewMode, SessionController
from .quiz_generator import QuizDirection, QuizGenerator, QuizQuestion
from .spaced_repetition import PracticeMode, ReviewResult, ReviewScheduler
from .text_parser import is_russian
from .utils import RandomSource, display_of
from .word_bank import FALLBACK_ORDER, WordBank

logger = logging.getLogger(__name__)


@dataclass
class FlashcardView:
    """What the renderer needs to draw one flashcard"""

    item: LearningItem
    display: str
    translation: str
    front_is_russian: bool
    position: int
    total: int


@dataclass
class QuizView:
    """One quiz question with options in presentation order"""

    item: LearningItem
    question: QuizQuestion
    options: list[str]
    position: int
    total: int


@dataclass
class AnswerOutcome:
    """Result of answering a flashcard or quiz question"""

    correct: bool
    correct_answer: str
    review: ReviewResult
    round_complete: bool


@dataclass
class ProgressSummary:
    """Overall, per-level and weekly progress"""

    total_words: int
    learned_words: int
    in_progress: int
    due_words: int
    levels: dict[str, dict[str, int]] = field(default_factory=dict)
    week: list[ProgressDay] = field(default_factory=list)
    session_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_words": self.total_words,
            "learned_words": self.learned_words,
            "in_progress": self.in_progress,
            "due_words": self.due_words,
            "levels": self.levels,
            "week": [day.model_dump() for day in self.week],
            "session_seconds": self.session_seconds,
        }


class VocabularyApp:
    """Application service for the vocabulary trainer"""

    def __init__(
        self,
        persistence: Persistence,
        word_bank: WordBank,
        notifier: Notifier | None = None,
        audio: AudioPlayer | None = None,
        settings: Settings | None = None,
        rng: RandomSource | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings or get_settings()
        self.persistence = persistence
        self.word_bank = word_bank
        self.notifier = notifier or LoggingNotifier()
        self.audio = audio or SilentAudioPlayer()
        self.rng = rng or random.Random()
        self.clock = clock or datetime.now

        self.state: AppState = self.persistence.load()

        self.scheduler = ReviewScheduler(
            stats=self.state.word_stats,
            intervals_minutes=self.settings.review_intervals_minutes,
            retry_minutes=self.settings.incorrect_retry_minutes,
            max_difficulty=self.settings.max_difficulty,
        )
        self.store = LearningSetStore(
            self.scheduler,
            word_bank,
            items=self.state.learning_words,
            custom_words=self.state.custom_words,
        )
        self.ledger = create_ledger(
            self.settings.progress_strategy,
            self.state.weekly_progress,
            self.settings.progress_days_retained,
        )
        self.quiz_generator = QuizGenerator(self.rng, self.settings.quiz_option_count)
        self.session = SessionController(
            self.store,
            self.scheduler,
            practice_mode=self.settings.default_practice_mode,
        )

    # Persistence

    def save(self) -> None:
        self.persistence.save(self.state)

    def reset_data(self) -> None:
        """Wipe every collection, stats included"""
        self.store.clear()
        self.scheduler.clear()
        self.ledger.clear()
        self.session.reset()
        self.save()
        self.notifier.notify("Все данные сброшены", "success")

    # Learning list

    def add_word(
        self, headword: str, translation: str, level: str, forms: list[str] | None = None
    ) -> bool:
        """Add a bank word to learning"""
        added = self.store.add(headword, translation, level, forms, now=self.clock())
        if added:
            self.save()
            self.notifier.notify(f'Слово "{headword}" добавлено в изучаемые!', "success")
        return added

    def remove_word(self, headword: str, level: str) -> bool:
        removed = self.store.remove(headword, level)
        if removed:
            self.save()
            self.notifier.notify(f'Слово "{headword}" удалено из изучаемых', "success")
        return removed

    def add_all_level_words(self, level: str) -> int:
        added_count = self.store.add_all(level, now=self.clock())
        if added_count > 0:
            self.save()
            self.notifier.notify(f"Добавлено {added_count} слов в изучаемые!", "success")
        else:
            self.notifier.notify("Все слова уже добавлены", "info")
        return added_count

    def remove_all_level_words(self, level: str) -> int:
        removed_count = self.store.remove_all(level)
        if removed_count > 0:
            self.save()
            self.notifier.notify(f"Удалено {removed_count} слов из изучаемых", "success")
        return removed_count

    def add_single_word(self, headword: str, translation: str, level: str) -> bool:
        """Manually typed word; both fields are required"""
        added = self.store.add_custom(headword, translation, level, now=self.clock())
        if added is None:
            self.notifier.notify("Заполните все поля!", "warning")
            return False
        self.save()
        self.notifier.notify(f'Слово "{headword.strip()}" добавлено!', "success")
        return added

    def bulk_add_words(self, raw_text: str, level: str) -> int:
        if not raw_text or not raw_text.strip():
            self.notifier.notify("Введите слова для добавления!", "warning")
            return 0

        added_count = self.store.bulk_import(raw_text, level, now=self.clock())
        # Custom words may change even when no learning item was added
        self.save()
        if added_count > 0:
            self.notifier.notify(f"Добавлено {added_count} слов!", "success")
        else:
            self.notifier.notify("Новые слова не найдены (возможны дубли)", "info")
        return added_count

    def delete_custom_word(self, headword: str) -> int:
        removed = self.store.delete_custom(headword)
        self.save()
        self.notifier.notify(f'Слово "{headword}" удалено', "success")
        return removed

    def toggle_word_learned(self, headword: str, level: str | None = None) -> LearningItem | None:
        item = self.store.toggle_learned(headword, level)
        if item is None:
            return None
        self.save()
        self.notifier.notify(
            "Слово отмечено как выученное!" if item.is_learned else "Слово возвращено в изучение",
            "success",
        )
        return item

    # Modes

    def set_mode(self, mode: ReviewMode | str) -> ReviewMode:
        return self.session.set_mode(mode)

    def set_practice_mode(self, practice_mode: PracticeMode | str) -> PracticeMode:
        return self.session.set_practice_mode(practice_mode)

    # Flashcards

    def current_flashcard(self, autoplay: bool = True) -> FlashcardView | None:
        """Flashcard for the active item; None renders the empty state"""
        now = self.clock()
        due = self.session.current_due_set(now)
        if not due:
            return None

        item = due[self.session.review_index % len(due)]
        display = display_of(item)
        view = FlashcardView(
            item=item,
            display=display,
            translation=item.translation,
            front_is_russian=is_russian(display),
            position=self.session.review_index + 1,
            total=len(due),
        )
        if autoplay and not view.front_is_russian:
            self.play_word(item)
        return view

    def answer_flashcard(self, correct: bool) -> AnswerOutcome | None:
        now = self.clock()
        due = self.session.current_due_set(now)
        if not due:
            return None

        item = due[self.session.review_index % len(due)]
        return self._record_review(item, correct, item.translation, len(due), now)

    # Quiz

    def current_quiz(self, autoplay: bool = True) -> QuizView | None:
        now = self.clock()
        due = self.session.current_due_set(now)
        if not due:
            return None

        item = due[self.session.review_index % len(due)]
        question = self.quiz_generator.build_question(
            item, self.store.items, self.word_bank.fallback_pool()
        )
        view = QuizView(
            item=item,
            question=question,
            options=self.quiz_generator.shuffle_options(question),
            position=self.session.review_index + 1,
            total=len(due),
        )
        if autoplay and question.direction is QuizDirection.EN_RU:
            self.play_word(item)
        return view

    def answer_quiz(self, view: QuizView, selected: str) -> AnswerOutcome:
        correct = view.question.is_correct(selected)
        outcome = self._record_review(
            view.item, correct, view.question.correct_answer, view.total, self.clock()
        )
        if view.question.direction is QuizDirection.RU_EN:
            self.play_word(view.item)
        return outcome

    def _record_review(
        self,
        item: LearningItem,
        correct: bool,
        correct_answer: str,
        due_count: int,
        now: datetime,
    ) -> AnswerOutcome:
        review = self.scheduler.record_answer(item.headword, correct, now)
        self.ledger.record(now)
        self.session.record_answer(correct)
        round_complete = self.session.advance(due_count)
        self.save()

        if round_complete:
            self.notifier.notify("Отличная работа! Все слова повторены!", "success")

        return AnswerOutcome(
            correct=correct,
            correct_answer=correct_answer,
            review=review,
            round_complete=round_complete,
        )

    # List

    def words_list(self) -> list[LearningItem]:
        return self.session.list_items(self.clock())

    # Progress

    def progress_summary(self) -> ProgressSummary:
        total_words = len(self.store.items)
        learned_words = sum(1 for item in self.store.items if item.is_learned)
        due_words = len(
            self.scheduler.due_items(self.store.items, PracticeMode.SCHEDULED, self.clock())
        )
        return ProgressSummary(
            total_words=total_words,
            learned_words=learned_words,
            in_progress=total_words - learned_words,
            due_words=due_words,
            levels=self.store.level_progress(FALLBACK_ORDER),
            week=self.ledger.days(),
            session_seconds=self.session.elapsed_seconds,
        )

    # Audio

    def play_word(self, item: LearningItem, region: str | None = None) -> None:
        """Best-effort pronunciation; failures never reach review state"""
        region = region if region in ("us", "uk") else self.settings.audio_region
        try:
            result = self.audio.play(item.headword, item.forms, region)
        except Exception as e:
            logger.warning(f"Audio failed for '{item.headword}': {e}")
            return

        if inspect.iscoroutine(result):
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                result.close()
                logger.debug(f"No running event loop, skipped audio for '{item.headword}'")
                return
            loop.create_task(self._guard_audio(result, item.headword))

    @staticmethod
    async def _guard_audio(coro, headword: str) -> None:
        try:
            await coro
        except Exception as e:
            logger.warning(f"Audio failed for '{headword}': {e}")

    # Game gates

    def open_game_gate(self, game_name: str) -> QuizGate | None:
        """Quiz that must be passed before a game opens"""
        return self._open_gate(
            game_name, self.settings.gate_min_words, self.settings.gate_required_correct
        )

    def open_overlay_quiz(self, container_id: str = "catalog") -> QuizGate | None:
        """Quiz shown on top of a running game"""
        return self._open_gate(
            container_id, self.settings.catalog_min_words, self.settings.overlay_required_correct
        )

    def _open_gate(self, name: str, min_words: int, required_correct: int) -> QuizGate | None:
        if len(self.store.unlearned()) < min_words:
            self.notifier.notify(
                f"Чтобы играть, добавьте минимум {min_words} слова в «Изучаю»", "warning"
            )
            return None
        return QuizGate(
            name,
            self.store,
            self.quiz_generator,
            self.ledger,
            required_correct,
            self.word_bank,
        )

    def answer_gate(self, gate: QuizGate, selected: str) -> bool:
        correct = gate.answer(selected, self.clock())
        if correct:
            self.save()
            if gate.passed:
                self.notifier.notify("Отлично! Продолжайте играть!", "success")
        return correct

    def create_quiz_cycle_scheduler(self, on_quiz: Callable[[str], Any]) -> QuizCycleScheduler:
        """Periodic re-quiz cycle that warns before every quiz"""
        warning_seconds = self.settings.game_quiz_warning_seconds

        def on_warning(container_id: str) -> None:
            self.notifier.notify(
                f"⚠️ Через {warning_seconds:g} секунд появится quiz! Поставьте игру на паузу!",
                "warning",
            )

        return QuizCycleScheduler(
            on_warning,
            on_quiz,
            interval_seconds=self.settings.game_quiz_interval_seconds,
            warning_seconds=warning_seconds,
        )
