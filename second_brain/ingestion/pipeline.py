"""Ingestion orchestrator: chunk -> embed (with fallback) -> batch upsert."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from second_brain.config import settings
from second_brain.ingestion.chunking import WarningCallback, chunk_episodes
from second_brain.ingestion.embeddings import EmbeddingProvider, embed_with_fallback
from second_brain.ingestion.models import Chunk, Episode, IngestionResult, VectorRecord
from second_brain.ingestion.storage import VectorStore

logger = logging.getLogger(__name__)


class IngestionValidationError(ValueError):
    """Raised when the ingestion request cannot produce any work."""


def build_metadata(chunk: Chunk, content_max_chars: int = 1000) -> dict[str, str]:
    """Metadata stored alongside a chunk's vector; optional keys only when set."""
    metadata = {
        "episodeTitle": chunk.episode_title,
        "content": chunk.content[:content_max_chars],
        "type": "transcript",
    }
    if chunk.speaker:
        metadata["speaker"] = chunk.speaker
    if chunk.timestamp:
        metadata["timestamp"] = chunk.timestamp
    return metadata


async def _prepare_record(
    chunk: Chunk,
    provider: EmbeddingProvider,
    content_max_chars: int,
) -> tuple[VectorRecord, bool]:
    vector, used_fallback = await embed_with_fallback(provider, chunk.content, chunk.chunk_id)
    record = VectorRecord(
        id=chunk.chunk_id,
        values=vector,
        metadata=build_metadata(chunk, content_max_chars),
    )
    return record, used_fallback


async def ingest_episodes(
    episodes: Sequence[Episode] | None,
    provider: EmbeddingProvider,
    store: VectorStore,
    batch_size: int | None = None,
    batch_delay: float | None = None,
    max_chars: int | None = None,
    on_warning: WarningCallback | None = None,
) -> IngestionResult:
    """Chunk, embed and store *episodes*, tolerating per-chunk and per-batch failures.

    Batches are processed strictly one after another. Within a batch every
    chunk is embedded concurrently; a chunk that fails outright is dropped
    and a batch whose upsert fails is skipped. Neither aborts the run.

    Args:
        episodes: Episodes to ingest.
        provider: Embedding provider (falls back to hashed embeddings on failure).
        store: Vector store receiving one upsert per batch.
        batch_size: Chunks per batch (default from settings).
        batch_delay: Seconds to pause after every batch (default from settings).
        max_chars: Chunker character budget (default from settings).
        on_warning: Optional diagnostic callback passed to the chunker.

    Returns:
        An :class:`IngestionResult` whose ``successful_vectors`` counts only
        records from batches the store accepted.

    Raises:
        IngestionValidationError: If *episodes* is not a list or yields no chunks.
    """
    if episodes is None or not isinstance(episodes, (list, tuple)):
        raise IngestionValidationError("Episodes array is required")

    batch_size = batch_size or settings.ingest_batch_size
    batch_delay = settings.ingest_batch_delay_seconds if batch_delay is None else batch_delay
    max_chars = max_chars or settings.chunk_max_chars
    content_max_chars = settings.metadata_content_max_chars

    logger.info("Processing %d episodes", len(episodes))
    chunks = chunk_episodes(episodes, max_chars=max_chars, on_warning=on_warning)
    logger.info("Created %d chunks from transcripts", len(chunks))

    if not chunks:
        raise IngestionValidationError("No chunks were created from the transcripts")

    result = IngestionResult(total_chunks=len(chunks))

    for start in range(0, len(chunks), batch_size):
        batch = chunks[start : start + batch_size]
        batch_number = start // batch_size + 1
        logger.info("Processing batch %d with %d chunks", batch_number, len(batch))

        outcomes = await asyncio.gather(
            *(_prepare_record(chunk, provider, content_max_chars) for chunk in batch),
            return_exceptions=True,
        )

        records: list[VectorRecord] = []
        for chunk, outcome in zip(batch, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.error("Error processing chunk %s: %s", chunk.chunk_id, outcome)
                result.dropped_chunks += 1
                continue
            record, used_fallback = outcome
            if used_fallback:
                result.fallback_embeddings += 1
            records.append(record)

        logger.info("Batch %d: %d vectors ready for upsert", batch_number, len(records))

        if records:
            try:
                stored = await asyncio.to_thread(store.upsert, records)
            except Exception:
                logger.exception("Failed to upsert batch %d", batch_number)
                result.failed_batches += 1
            else:
                logger.info("Successfully upserted batch %d", batch_number)
                result.successful_vectors += stored

        await asyncio.sleep(batch_delay)

    logger.info("Ingestion complete: %d vectors stored", result.successful_vectors)
    return result
