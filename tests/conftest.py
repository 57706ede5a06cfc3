"""
Shared fixtures for vocabulary trainer tests
"""

from datetime import datetime, timedelta

import pytest

from vocab_trainer.config import Settings
from vocab_trainer.word_bank import WordBank


class ScriptedRandom:
    """Random source returning a fixed sequence of values, cycling"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


class FixedClock:
    """Controllable clock for the application service"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def now():
    return datetime(2024, 3, 4, 12, 0, 0)


@pytest.fixture
def clock(now):
    return FixedClock(now)


@pytest.fixture
def settings():
    """Settings with the default ladder, independent of the environment"""
    return Settings(
        _env_file=None,
        review_intervals_minutes=[60, 240, 1440, 4320, 10080],
        incorrect_retry_minutes=10,
        max_difficulty=2,
        progress_strategy="daily",
        default_practice_mode="scheduled",
    )


@pytest.fixture
def small_bank():
    """Tiny word bank covering levels, irregulars and prepositions"""
    return WordBank.from_dict(
        {
            "A1": [
                {"word": "about", "translation": "о, около"},
                {"word": "house", "translation": "дом"},
                {"word": "cat", "translation": "кошка"},
            ],
            "A2": [
                {"word": "river", "translation": "река"},
                {"word": "bridge", "translation": "мост"},
            ],
            "IRREGULARS": [
                {"word": "go", "translation": "идти", "forms": ["go", "went", "gone"]},
                {"word": "see", "translation": "видеть", "forms": ["see", "saw", "seen"]},
            ],
            "PREPOSITIONS": [
                {"word": "about", "translation": "о, об"},
                {"word": "under", "translation": "под"},
            ],
        }
    )
