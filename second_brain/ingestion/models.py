"""Data models for the ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Episode:
    """A titled transcript submitted for ingestion."""

    title: str
    transcript: Any
    speaker: str | None = None
    timestamp: str | None = None


@dataclass(frozen=True)
class Chunk:
    """A bounded slice of an episode transcript, ready for embedding."""

    chunk_id: str
    episode_title: str
    content: str
    speaker: str | None = None
    timestamp: str | None = None


@dataclass
class VectorRecord:
    """A single row handed to the vector store."""

    id: str
    values: list[float]
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class IngestionResult:
    """Outcome of one ingestion run.

    ``successful_vectors`` only counts records whose batch upsert succeeded.
    """

    total_chunks: int = 0
    successful_vectors: int = 0
    failed_batches: int = 0
    fallback_embeddings: int = 0
    dropped_chunks: int = 0
