"""
Unit tests for database operations
"""

import os
import tempfile
from datetime import timedelta
from unittest.mock import patch

import pytest

from vocab_trainer.core.database.models import (
    AppState,
    CustomWord,
    LearningItem,
    ProgressDay,
    ReviewStats,
)
from vocab_trainer.database import DatabaseManager, get_database_path, get_db_manager, init_db
from vocab_trainer.spaced_repetition import ReviewScheduler


class TestDatabaseManager:
    """Test DatabaseManager class"""

    @pytest.fixture
    def temp_db(self):
        """Create temporary database for testing"""
        temp_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
        temp_file.close()

        db_manager = DatabaseManager(temp_file.name)
        db_manager.init_database()

        yield db_manager

        # Cleanup
        db_manager.close()
        for suffix in ("", "-wal", "-shm"):
            if os.path.exists(temp_file.name + suffix):
                os.unlink(temp_file.name + suffix)

    @pytest.fixture
    def sample_state(self, now):
        """Sample state for testing"""
        return AppState(
            learning_words=[
                LearningItem(headword="house", translation="дом", level="A1", added_at=now),
                LearningItem(
                    headword="go",
                    translation="идти",
                    level="IRREGULARS",
                    forms=["go", "went", "gone"],
                    is_learned=True,
                    added_at=now,
                ),
            ],
            custom_words=[
                CustomWord(headword="sunrise", translation="рассвет", level="CUSTOM", added_at=now)
            ],
            word_stats={
                "house": ReviewStats(
                    correct_count=2,
                    incorrect_count=1,
                    last_reviewed_at=now,
                    next_due_at=now + timedelta(hours=4),
                    difficulty=1,
                )
            },
            weekly_progress=[ProgressDay(date_key="2024-03-04", review_count=3)],
        )

    def test_database_initialization(self, temp_db):
        """Test database initialization"""
        with temp_db.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT name FROM sqlite_master
                WHERE type='table' AND name='kv_store'
                """
            )
            assert cursor.fetchone() is not None

    def test_load_empty_database(self, temp_db):
        state = temp_db.load()

        assert state == AppState()

    def test_save_and_load_round_trip(self, temp_db, sample_state):
        assert temp_db.save(sample_state) is True

        loaded = temp_db.load()

        assert loaded == sample_state
        assert loaded.learning_words[1].forms == ["go", "went", "gone"]
        assert loaded.word_stats["house"].difficulty == 1

    def test_state_survives_new_manager(self, temp_db, sample_state):
        temp_db.save(sample_state)

        other = DatabaseManager(temp_db.db_connection.db_path)
        assert other.load() == sample_state

    def test_save_overwrites(self, temp_db, sample_state):
        temp_db.save(sample_state)
        temp_db.save(AppState())

        assert temp_db.load() == AppState()

    def test_corrupt_collection_recovers_independently(self, temp_db, sample_state):
        """Test unreadable JSON in one key leaves the others intact"""
        temp_db.save(sample_state)
        temp_db.state_repo.set("word_stats", "{not json")

        loaded = temp_db.load()

        assert loaded.word_stats == {}
        assert loaded.learning_words == sample_state.learning_words
        assert loaded.weekly_progress == sample_state.weekly_progress

    def test_invalid_records_reset_collection(self, temp_db, sample_state):
        temp_db.save(sample_state)
        temp_db.state_repo.set("learning_words", '[{"headword": "house"}]')
        temp_db.state_repo.set("custom_words", '{"wrong": "shape"}')

        loaded = temp_db.load()

        assert loaded.learning_words == []
        assert loaded.custom_words == []
        assert loaded.word_stats == sample_state.word_stats

    def test_stats_at_difficulty_cap_survive_reload(self, temp_db, now):
        """Test stats driven to the difficulty cap still load back"""
        scheduler = ReviewScheduler(intervals_minutes=[60], retry_minutes=10, max_difficulty=3)
        for _ in range(3):
            scheduler.record_answer("cat", False, now)
        scheduler.record_answer("house", True, now)

        temp_db.save(AppState(word_stats=scheduler.stats))
        loaded = temp_db.load()

        assert set(loaded.word_stats) == {"cat", "house"}
        assert loaded.word_stats["cat"].difficulty == 2
        assert loaded.word_stats["cat"].incorrect_count == 3

    def test_save_failure_is_reported(self, temp_db, sample_state):
        with patch.object(temp_db.state_repo, "set_many", side_effect=RuntimeError("disk full")):
            assert temp_db.save(sample_state) is False

    def test_reset(self, temp_db, sample_state):
        temp_db.save(sample_state)
        temp_db.reset()

        assert temp_db.state_repo.keys() == []
        assert temp_db.load() == AppState()


class TestStateRepository:
    """Test the key-value repository"""

    @pytest.fixture
    def memory_db(self):
        db_manager = DatabaseManager(":memory:")
        db_manager.init_database()
        yield db_manager
        db_manager.close()

    def test_set_get_delete(self, memory_db):
        repo = memory_db.state_repo

        repo.set("a", "1")
        repo.set("a", "2")
        repo.set_many({"b": "3", "c": "4"})

        assert repo.get("a") == "2"
        assert repo.keys() == ["a", "b", "c"]
        assert repo.delete("a") is True
        assert repo.delete("a") is False
        assert repo.get("a") is None
        assert repo.clear() == 2

    def test_memory_database_round_trip(self, memory_db):
        state = AppState(weekly_progress=[ProgressDay(date_key="2024-03-04", review_count=1)])
        memory_db.save(state)

        assert memory_db.load() == state


class TestDatabaseHelpers:
    """Test module-level helpers"""

    def test_get_database_path(self):
        assert get_database_path("sqlite:///tmp/test.db") == "tmp/test.db"
        assert get_database_path("postgres://host/db") == "data/vocab.db"

    def test_get_db_manager_creates_new_instances(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'vocab.db'}"

        first = get_db_manager(url)
        second = get_db_manager(url)

        assert first is not second
        assert first.db_connection.db_path == str(tmp_path / "vocab.db")
        first.close()
        second.close()

    def test_init_db(self, tmp_path):
        db_manager = init_db(f"sqlite:///{tmp_path / 'nested' / 'vocab.db'}")

        assert (tmp_path / "nested" / "vocab.db").exists()
        assert db_manager.load() == AppState()
