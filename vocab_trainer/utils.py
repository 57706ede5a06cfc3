"""
Utility functions for the vocabulary trainer
"""

import logging
import random
import time
from datetime import date
from typing import Any, Protocol, TypeVar

from .core.database.models import FORMS_SEPARATOR

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with a random() returning a float in [0, 1)"""

    def random(self) -> float: ...


def shuffle(items: list[T], rng: RandomSource | None = None) -> list[T]:
    """Fisher-Yates shuffle into a new list; the input is left untouched"""
    rng = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def english_display(headword: str, forms: list[str] | None = None) -> str:
    """English side of a word: forms joined by an arrow, or the bare word"""
    if forms:
        return FORMS_SEPARATOR.join(forms)
    return headword or ""


def display_of(word: Any) -> str:
    """English display form of any item carrying headword/forms"""
    if word is None:
        return ""
    return english_display(word.headword, word.forms)


def format_date_key(day: date) -> str:
    return day.isoformat()


def calculate_success_rate(correct: int, total: int) -> float:
    """Calculate success rate as percentage"""
    if total == 0:
        return 0.0
    return (correct / total) * 100.0


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format"""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}с"
    elif seconds < 3600:
        minutes = seconds // 60
        return f"{minutes}м"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        return f"{hours}ч {minutes}м"


def format_progress_stats(summary: dict[str, Any]) -> str:
    """Format progress summary for plain-text display"""
    total_words = summary.get("total_words", 0)
    learned_words = summary.get("learned_words", 0)
    in_progress = summary.get("in_progress", 0)
    due_words = summary.get("due_words", 0)

    result = "📊 Ваш прогресс:\n\n"
    result += f"📚 Всего слов: {total_words}\n"
    result += f"✅ Выучено: {learned_words}\n"
    result += f"🔄 В процессе: {in_progress}\n"
    result += f"⏰ К повторению: {due_words}\n"

    for level, counts in summary.get("levels", {}).items():
        if counts["total"] == 0:
            continue
        result += f"  {level}: {counts['learned']} / {counts['total']}\n"

    session_seconds = summary.get("session_seconds")
    if session_seconds is not None:
        result += f"⏱ Время сессии: {format_duration(session_seconds)}\n"

    week = summary.get("week", [])
    if week:
        result += "\n📅 Активность за неделю:\n"
        for day in week:
            result += f"  {day['date_key']}: {day['review_count']} повторений\n"

    return result.strip()


class Timer:
    """Simple timer for measuring duration"""

    def __init__(self):
        self.start_time = None

    def start(self):
        """Start the timer"""
        self.start_time = time.time()

    def elapsed(self) -> float | None:
        """Get elapsed time in seconds"""
        if self.start_time is None:
            return None

        return time.time() - self.start_time

    def get_elapsed_time(self) -> float:
        return self.elapsed() or 0.0
