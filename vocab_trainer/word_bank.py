"""
Static word bank grouped by proficiency level and category
"""

import json
import logging
from pathlib import Path
from typing import Any

from .core.database.models import WordEntry

logger = logging.getLogger(__name__)

LEVELS = ["A1", "A2", "B1", "B2", "C1", "C2"]
CATEGORIES = ["IRREGULARS", "PREPOSITIONS"]
# Order in which quiz distractors fall back to bank words
FALLBACK_ORDER = LEVELS + CATEGORIES


class WordBank:
    """Read-only catalog of word entries"""

    def __init__(self, entries: dict[str, list[WordEntry]] | None = None):
        self._entries: dict[str, list[WordEntry]] = entries or {}

    @classmethod
    def from_dict(cls, data: dict[str, list[dict[str, Any]]]) -> "WordBank":
        """Build from raw {level: [{word, translation, forms?, ...}]} data"""
        entries: dict[str, list[WordEntry]] = {}
        for level, words in data.items():
            level_entries = []
            for raw in words:
                headword = raw.get("word") or raw.get("headword")
                translation = raw.get("translation")
                if not headword or not translation:
                    logger.warning(f"Skipping malformed bank entry in {level}: {raw}")
                    continue
                level_entries.append(
                    WordEntry(
                        headword=headword,
                        translation=translation,
                        level=level,
                        forms=raw.get("forms") or None,
                        category=raw.get("category"),
                        pos=raw.get("pos"),
                    )
                )
            entries[level] = level_entries
        return cls(entries)

    @classmethod
    def from_json(cls, path: str | Path) -> "WordBank":
        """Load the catalog from a JSON file"""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        bank = cls.from_dict(data)
        logger.info(f"Loaded word bank from {path}: {bank.counts()}")
        return bank

    def get_by_level(self, level: str) -> list[WordEntry]:
        """Entries for a level or category; unknown levels are empty"""
        return list(self._entries.get(level, []))

    def levels(self) -> list[str]:
        return list(self._entries.keys())

    def counts(self) -> dict[str, int]:
        """Number of entries per level, for level cards"""
        return {level: len(words) for level, words in self._entries.items()}

    def fallback_pool(self) -> list[list[WordEntry]]:
        """Entries grouped in fixed fallback order for quiz distractors"""
        return [self.get_by_level(level) for level in FALLBACK_ORDER]
