"""
Unified database manager: loads and saves the application state
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from ...config import get_database_path
from .connection import DatabaseConnection
from .models import AppState, CustomWord, LearningItem, ProgressDay, ReviewStats
from .repositories.state_repository import StateRepository

logger = logging.getLogger(__name__)

LEARNING_WORDS_KEY = "learning_words"
CUSTOM_WORDS_KEY = "custom_words"
WORD_STATS_KEY = "word_stats"
WEEKLY_PROGRESS_KEY = "weekly_progress"

# Each persisted collection is parsed and recovered on its own
_COLLECTIONS: dict[str, TypeAdapter] = {
    LEARNING_WORDS_KEY: TypeAdapter(list[LearningItem]),
    CUSTOM_WORDS_KEY: TypeAdapter(list[CustomWord]),
    WORD_STATS_KEY: TypeAdapter(dict[str, ReviewStats]),
    WEEKLY_PROGRESS_KEY: TypeAdapter(list[ProgressDay]),
}


class DatabaseManager:
    """Persistence collaborator on top of the SQLite key-value store"""

    def __init__(self, db_path: str | None = None):
        self.db_connection = DatabaseConnection(db_path)
        self.state_repo = StateRepository(self.db_connection)

    def init_database(self) -> None:
        """Initialize database tables"""
        self.db_connection.init_database()

    def load(self) -> AppState:
        """Load the full state, resetting any unreadable collection to empty"""
        values: dict[str, Any] = {}
        for key, adapter in _COLLECTIONS.items():
            values[key] = self._load_collection(key, adapter)
        state = AppState(**values)
        logger.info(
            f"Loaded state: {len(state.learning_words)} learning words, "
            f"{len(state.custom_words)} custom words, {len(state.word_stats)} stats"
        )
        return state

    def _load_collection(self, key: str, adapter: TypeAdapter) -> Any:
        empty = {} if key == WORD_STATS_KEY else []
        try:
            raw = self.state_repo.get(key)
        except Exception as e:
            logger.error(f"Error reading '{key}' from storage: {e}")
            return empty

        if raw is None:
            return empty

        try:
            return adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Corrupt '{key}' in storage, resetting to empty: {e}")
            return empty

    def save(self, state: AppState) -> bool:
        """Save the full state; failures are logged, never raised"""
        try:
            payload = {
                LEARNING_WORDS_KEY: _dump(state.learning_words),
                CUSTOM_WORDS_KEY: _dump(state.custom_words),
                WORD_STATS_KEY: _dump(state.word_stats),
                WEEKLY_PROGRESS_KEY: _dump(state.weekly_progress),
            }
            self.state_repo.set_many(payload)
            return True
        except Exception as e:
            logger.error(f"Error saving state: {e}")
            return False

    def reset(self) -> None:
        """Drop every stored collection"""
        try:
            self.state_repo.clear()
        except Exception as e:
            logger.error(f"Error resetting state: {e}")

    def get_connection(self):
        """Get database connection for direct SQL access in tests"""
        return self.db_connection.get_connection()

    def close(self) -> None:
        self.db_connection.close()


def _dump(value: Any) -> str:
    if isinstance(value, dict):
        data = {k: v.model_dump(mode="json") for k, v in value.items()}
    else:
        data = [
            item.model_dump(mode="json") if isinstance(item, BaseModel) else item
            for item in value
        ]
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def get_db_manager(database_url: str | None = None) -> DatabaseManager:
    """Create a database manager for a sqlite:/// URL or a plain path"""
    if database_url and not database_url.startswith("sqlite:///"):
        db_path = database_url
    else:
        db_path = get_database_path(database_url)
    db_manager = DatabaseManager(db_path)
    db_manager.init_database()
    return db_manager
