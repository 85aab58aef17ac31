"""Delete every stored transcript vector, leaving an empty table behind."""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from second_brain.config import settings
from second_brain.ingestion.storage import SupabaseVectorStore


def reset_database(assume_yes: bool = False) -> int:
    """Clear the vector table and return the number of deleted rows."""
    store = SupabaseVectorStore()

    print("=== RESETTING VECTOR STORE ===")
    before = store.describe_stats()
    print(f"Table {settings.vector_table!r} holds {before['totalRecordCount']} vectors.")

    if not assume_yes:
        answer = input("Delete all of them? [y/N] ").strip().lower()
        if answer != "y":
            print("Aborted.")
            return 0

    deleted = store.reset()
    print(f"Deleted {deleted} vectors.")

    store.ensure_ready()
    print("Database reset completed successfully!")
    return deleted


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    args = parser.parse_args()
    try:
        reset_database(args.yes)
    except Exception as e:
        print(f"Error resetting database: {e}")
        sys.exit(1)
