#!/usr/bin/env python3
"""
Export persisted trainer state from a database to JSON
"""

import json
import sys
import traceback
from datetime import datetime
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from vocab_trainer.core.database.database_manager import DatabaseManager  # noqa: E402


def export_state(db_path: str, output_path: str) -> bool:
    """Export learning words, custom words, stats and progress to JSON"""
    try:
        print(f"📖 Exporting state from {db_path}")
        db_manager = DatabaseManager(db_path)
        db_manager.init_database()
        state = db_manager.load()
        db_manager.close()

        print(f"  📝 Found {len(state.learning_words)} learning words")
        print(f"  ✍️  Found {len(state.custom_words)} custom words")
        print(f"  📊 Found {len(state.word_stats)} review stats")
        print(f"  📅 Found {len(state.weekly_progress)} progress days")

        export_data = {
            "export_info": {
                "exported_at": datetime.now().isoformat(),
                "database_path": db_path,
                "script_version": "1.0",
            },
            **state.model_dump(mode="json"),
        }

        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(export_data, f, indent=2, ensure_ascii=False)

        print(f"✅ Successfully exported state to {output_path}")
        return True

    except Exception as e:
        print(f"❌ Export failed: {e}")
        traceback.print_exc()
        return False


def main():
    """Main export function"""
    if len(sys.argv) != 3:
        print("Usage: python export_state.py <database_path> <output_json_path>")
        print("Example: python export_state.py data/vocab.db data/vocab_state.json")
        sys.exit(1)

    db_path = sys.argv[1]
    output_path = sys.argv[2]

    if not Path(db_path).exists():
        print(f"❌ Database file not found: {db_path}")
        sys.exit(1)

    print(f"🚀 Starting export from {db_path} to {output_path}")

    if export_state(db_path, output_path):
        print("🎉 Export completed successfully!")
        sys.exit(0)
    else:
        print("💥 Export failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
