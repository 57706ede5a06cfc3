"""
Persisted record models for the vocabulary trainer
"""

from datetime import datetime

from pydantic import BaseModel, Field

FORMS_SEPARATOR = " → "
MAX_DIFFICULTY = 2


class WordEntry(BaseModel):
    """Read-only word bank entry"""

    headword: str
    translation: str
    level: str
    forms: list[str] | None = None
    category: str | None = None
    pos: str | None = None


class LearningItem(BaseModel):
    """A word the user is actively tracking"""

    headword: str
    translation: str
    level: str
    forms: list[str] | None = None
    is_learned: bool = False
    is_custom: bool = False
    added_at: datetime = Field(default_factory=datetime.now)

    @property
    def key(self) -> tuple[str, str]:
        return (self.headword, self.level)


class CustomWord(BaseModel):
    """User-authored word, independent of the word bank"""

    headword: str
    translation: str
    level: str
    forms: list[str] | None = None
    added_at: datetime = Field(default_factory=datetime.now)


class ReviewStats(BaseModel):
    """Review statistics, keyed by headword"""

    correct_count: int = 0
    incorrect_count: int = 0
    last_reviewed_at: datetime | None = None
    next_due_at: datetime
    difficulty: int = Field(default=0, ge=0, le=MAX_DIFFICULTY)


class ProgressDay(BaseModel):
    """Review count for one calendar day"""

    date_key: str
    review_count: int = 0


class AppState(BaseModel):
    """Everything the persistence collaborator loads and saves"""

    learning_words: list[LearningItem] = Field(default_factory=list)
    custom_words: list[CustomWord] = Field(default_factory=list)
    word_stats: dict[str, ReviewStats] = Field(default_factory=dict)
    weekly_progress: list[ProgressDay] = Field(default_factory=list)
