"""
User learning list and custom words
"""

import logging
import random
from datetime import datetime

from ...spaced_repetition import ReviewScheduler
from ...text_parser import parse_bulk_text
from ...utils import RandomSource
from ...word_bank import WordBank
from ..database.models import CustomWord, LearningItem

logger = logging.getLogger(__name__)


def _dedup_key(level: str, headword: str) -> str:
    return f"{level}::{headword.lower()}"


class LearningSetStore:
    """CRUD over learning items and custom words"""

    def __init__(
        self,
        scheduler: ReviewScheduler,
        word_bank: WordBank | None = None,
        items: list[LearningItem] | None = None,
        custom_words: list[CustomWord] | None = None,
    ):
        self.scheduler = scheduler
        self.word_bank = word_bank or WordBank()
        self.items: list[LearningItem] = items if items is not None else []
        self.custom_words: list[CustomWord] = custom_words if custom_words is not None else []

    # Lookups

    def get(self, headword: str, level: str) -> LearningItem | None:
        """Learning item by its (headword, level) key"""
        key = (headword, level)
        for item in self.items:
            if item.key == key:
                return item
        return None

    def find_by_headword(self, headword: str) -> LearningItem | None:
        for item in self.items:
            if item.headword == headword:
                return item
        return None

    def contains(self, headword: str, level: str) -> bool:
        return self.get(headword, level) is not None

    def unlearned(self) -> list[LearningItem]:
        return [item for item in self.items if not item.is_learned]

    def random_unlearned(self, rng: RandomSource | None = None) -> LearningItem | None:
        """Random unlearned item, or None when everything is learned"""
        available = self.unlearned()
        if not available:
            return None
        rng = rng or random
        return available[int(rng.random() * len(available))]

    def level_progress(self, levels: list[str]) -> dict[str, dict[str, int]]:
        """Total and learned counts per level"""
        progress = {}
        for level in levels:
            level_items = [item for item in self.items if item.level == level]
            progress[level] = {
                "total": len(level_items),
                "learned": sum(1 for item in level_items if item.is_learned),
            }
        return progress

    # Learning list

    def add(
        self,
        headword: str,
        translation: str,
        level: str,
        forms: list[str] | None = None,
        is_custom: bool = False,
        now: datetime | None = None,
    ) -> bool:
        """Add a word to learning; a duplicate (headword, level) is a no-op"""
        if self.contains(headword, level):
            return False

        now = now or datetime.now()
        self.items.append(
            LearningItem(
                headword=headword,
                translation=translation,
                level=level,
                forms=forms or None,
                is_custom=is_custom,
                added_at=now,
            )
        )
        self.scheduler.ensure_stats(headword, now)
        logger.info(f"Added '{headword}' ({level}) to learning")
        return True

    def remove(self, headword: str, level: str) -> bool:
        """Remove the first item matching the key; stats are kept"""
        key = (headword, level)
        for index, item in enumerate(self.items):
            if item.key == key:
                del self.items[index]
                logger.info(f"Removed '{headword}' ({level}) from learning")
                return True
        return False

    def add_all(self, level: str, now: datetime | None = None) -> int:
        """Add every bank entry of a level, returning how many were new"""
        now = now or datetime.now()
        added_count = 0
        for entry in self.word_bank.get_by_level(level):
            if self.add(entry.headword, entry.translation, level, entry.forms, now=now):
                added_count += 1
        logger.info(f"Added {added_count} words from {level}")
        return added_count

    def remove_all(self, level: str) -> int:
        """Remove every learning item of a level, returning how many went"""
        initial_length = len(self.items)
        self.items[:] = [item for item in self.items if item.level != level]
        removed_count = initial_length - len(self.items)
        logger.info(f"Removed {removed_count} words from {level}")
        return removed_count

    def toggle_learned(self, headword: str, level: str | None = None) -> LearningItem | None:
        """
        Flip the learned flag

        Without a level the first item with this headword is toggled,
        whichever level it belongs to.
        """
        item = self.get(headword, level) if level is not None else self.find_by_headword(headword)
        if item is None:
            return None
        item.is_learned = not item.is_learned
        logger.info(f"'{headword}' ({item.level}) learned={item.is_learned}")
        return item

    # Custom words

    def add_custom(
        self,
        headword: str,
        translation: str,
        level: str,
        now: datetime | None = None,
    ) -> bool | None:
        """
        Add a manually typed word to both custom words and learning

        Returns:
            None if either field is blank, otherwise whether a new
            learning item was created
        """
        headword = (headword or "").strip()
        translation = (translation or "").strip()
        if not headword or not translation:
            return None

        now = now or datetime.now()
        key = _dedup_key(level, headword)

        if not any(_dedup_key(w.level, w.headword) == key for w in self.custom_words):
            self.custom_words.append(
                CustomWord(headword=headword, translation=translation, level=level, added_at=now)
            )

        added = False
        if not any(_dedup_key(i.level, i.headword) == key for i in self.items):
            self.items.append(
                LearningItem(
                    headword=headword,
                    translation=translation,
                    level=level,
                    is_custom=True,
                    added_at=now,
                )
            )
            added = True

        self.scheduler.ensure_stats(headword, now)
        return added

    def bulk_import(self, raw_text: str, level: str, now: datetime | None = None) -> int:
        """Import "left <sep> translation" lines, returning new learning items"""
        now = now or datetime.now()
        seen = {_dedup_key(w.level, w.headword) for w in self.custom_words}
        seen_learn = {_dedup_key(i.level, i.headword) for i in self.items}

        added_count = 0
        for parsed in parse_bulk_text(raw_text):
            key = _dedup_key(level, parsed.headword)
            if key not in seen:
                self.custom_words.append(
                    CustomWord(
                        headword=parsed.headword,
                        translation=parsed.translation,
                        level=level,
                        forms=parsed.forms,
                        added_at=now,
                    )
                )
                seen.add(key)
            if key not in seen_learn:
                self.items.append(
                    LearningItem(
                        headword=parsed.headword,
                        translation=parsed.translation,
                        level=level,
                        forms=parsed.forms,
                        is_custom=True,
                        added_at=now,
                    )
                )
                seen_learn.add(key)
                self.scheduler.ensure_stats(parsed.headword, now)
                added_count += 1

        logger.info(f"Bulk import into {level}: {added_count} new learning words")
        return added_count

    def delete_custom(self, headword: str) -> int:
        """Delete a custom word and its custom learning items"""
        before = len(self.custom_words) + len(self.items)
        self.custom_words[:] = [w for w in self.custom_words if w.headword != headword]
        self.items[:] = [
            item for item in self.items if not (item.headword == headword and item.is_custom)
        ]
        return before - len(self.custom_words) - len(self.items)

    def clear(self) -> None:
        self.items.clear()
        self.custom_words.clear()
