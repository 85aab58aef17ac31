"""Load a directory of plain-text transcripts into the vector store."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from second_brain.ingestion.embeddings import OpenAIEmbeddingProvider
from second_brain.ingestion.models import Episode
from second_brain.ingestion.pipeline import IngestionValidationError, ingest_episodes
from second_brain.ingestion.storage import SupabaseVectorStore


def read_episodes(data_dir: Path, max_files: int | None = None) -> list[Episode]:
    """Read every ``.txt`` file under *data_dir* as one episode titled by its stem."""
    files = sorted(data_dir.rglob("*.txt"))
    if max_files:
        files = files[:max_files]

    episodes: list[Episode] = []
    for filepath in files:
        transcript = filepath.read_text(encoding="utf-8").strip()
        episodes.append(Episode(title=filepath.stem or "Untitled Episode", transcript=transcript))
    return episodes


def load_transcripts(data_dir: str, max_files: int | None = None) -> int:
    """Ingest all transcripts in *data_dir* and return the number of stored vectors."""
    data_path = Path(data_dir)

    if not data_path.is_dir():
        print(f"Data directory {data_dir} not found.")
        return 0

    episodes = read_episodes(data_path, max_files)
    print(f"Loading {len(episodes)} episodes from {data_dir}...")

    try:
        result = asyncio.run(
            ingest_episodes(
                episodes,
                OpenAIEmbeddingProvider(),
                SupabaseVectorStore(),
                on_warning=lambda msg: print(f"  WARN {msg}"),
            )
        )
    except IngestionValidationError as e:
        print(f"Nothing to ingest: {e}")
        return 0

    print(
        f"\nDone! Stored {result.successful_vectors}/{result.total_chunks} chunks "
        f"({result.fallback_embeddings} fallback embeddings, "
        f"{result.failed_batches} failed batches, {result.dropped_chunks} dropped)."
    )
    return result.successful_vectors


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("dir", help="Directory containing .txt transcripts")
    parser.add_argument("--max", type=int, default=None)
    args = parser.parse_args()
    load_transcripts(args.dir, args.max)
