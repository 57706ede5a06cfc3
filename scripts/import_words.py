#!/usr/bin/env python3
"""
Bulk-import a "word - перевод" text file into the learning list
"""

import logging
import sys
import traceback
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from vocab_trainer.app import VocabularyApp  # noqa: E402
from vocab_trainer.config import get_settings  # noqa: E402
from vocab_trainer.database import init_db  # noqa: E402
from vocab_trainer.word_bank import WordBank  # noqa: E402


def import_words(text_path: str, database_url: str, level: str) -> int | None:
    """Import every parseable line, returning how many words were new"""
    try:
        print(f"📖 Loading words from {text_path}")
        raw_text = Path(text_path).read_text(encoding="utf-8")

        settings = get_settings()
        db_manager = init_db(database_url)
        app = VocabularyApp(
            db_manager, WordBank.from_json(settings.word_bank_path), settings=settings
        )
        added_count = app.bulk_add_words(raw_text, level)
        db_manager.close()

        print(f"✅ Imported {added_count} new words into {level}")
        return added_count

    except Exception as e:
        print(f"❌ Import failed: {e}")
        traceback.print_exc()
        return None


def main():
    """Main import function"""
    if len(sys.argv) not in (3, 4):
        print("Usage: python import_words.py <words_txt_path> <database_path> [LEVEL]")
        print("Example: python import_words.py words.txt data/vocab.db CUSTOM")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    text_path = sys.argv[1]
    database_url = f"sqlite:///{sys.argv[2]}"
    level = sys.argv[3].upper() if len(sys.argv) == 4 else "CUSTOM"

    if not Path(text_path).exists():
        print(f"❌ Text file not found: {text_path}")
        sys.exit(1)

    print(f"🚀 Starting import from {text_path} to {sys.argv[2]}")

    if import_words(text_path, database_url, level) is not None:
        print("🎉 Import completed successfully!")
        sys.exit(0)
    else:
        print("💥 Import failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
