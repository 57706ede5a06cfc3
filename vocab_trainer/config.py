"""
Configuration management for the vocabulary trainer
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.database.models import MAX_DIFFICULTY

DEFAULT_WORD_BANK_PATH = Path(__file__).parent / "data" / "word_bank.json"
MIN_QUIZ_OPTIONS = 2
MAX_QUIZ_OPTIONS = 4


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Storage Configuration
    database_url: str = Field(default="sqlite:///data/vocab.db")
    word_bank_path: str = Field(default=str(DEFAULT_WORD_BANK_PATH))

    # Application Configuration
    log_level: str = Field(default="INFO")
    default_practice_mode: str = Field(default="scheduled")

    # Spaced Repetition Configuration
    # 1h, 4h, 24h, 3d, 7d
    review_intervals_minutes: list[int] = Field(
        default_factory=lambda: [60, 240, 1440, 4320, 10080]
    )
    incorrect_retry_minutes: int = Field(default=10)
    max_difficulty: int = Field(default=2)

    # Quiz Configuration
    quiz_option_count: int = Field(default=4)

    # Progress Configuration
    progress_strategy: str = Field(default="daily")
    progress_days_retained: int = Field(default=7)

    # Game gates
    gate_min_words: int = Field(default=3)
    gate_required_correct: int = Field(default=3)
    catalog_min_words: int = Field(default=4)
    overlay_required_correct: int = Field(default=4)
    game_quiz_interval_seconds: float = Field(default=300.0)
    game_quiz_warning_seconds: float = Field(default=15.0)

    # Audio
    audio_region: str = Field(default="us")

    @field_validator("review_intervals_minutes")
    @classmethod
    def _check_intervals(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("review_intervals_minutes must not be empty")
        if any(minutes <= 0 for minutes in value):
            raise ValueError("review intervals must be positive")
        return value

    @field_validator("max_difficulty")
    @classmethod
    def _check_max_difficulty(cls, value: int) -> int:
        if not 0 <= value <= MAX_DIFFICULTY:
            raise ValueError(f"max_difficulty must be between 0 and {MAX_DIFFICULTY}")
        return value

    @field_validator("quiz_option_count")
    @classmethod
    def _check_quiz_option_count(cls, value: int) -> int:
        if not MIN_QUIZ_OPTIONS <= value <= MAX_QUIZ_OPTIONS:
            raise ValueError(
                f"quiz_option_count must be between {MIN_QUIZ_OPTIONS} and {MAX_QUIZ_OPTIONS}"
            )
        return value

    @field_validator("progress_strategy")
    @classmethod
    def _check_progress_strategy(cls, value: str) -> str:
        value = value.lower()
        if value not in ("daily", "weekly"):
            raise ValueError(f"Unknown progress strategy: {value}")
        return value

    @field_validator("audio_region")
    @classmethod
    def _check_region(cls, value: str) -> str:
        # Anything other than uk falls back to the US recordings
        return "uk" if value.lower() == "uk" else "us"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


def get_database_path(database_url: str | None = None) -> str:
    """Get the database file path from URL"""
    url = database_url or get_settings().database_url
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "")
    return "data/vocab.db"
