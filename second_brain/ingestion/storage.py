"""Supabase (pgvector) vector store for transcript chunks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, cast

from supabase import Client, create_client

from second_brain.config import settings
from second_brain.ingestion.models import VectorRecord


@dataclass
class Match:
    """A single nearest-neighbour hit returned by the store."""

    id: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)


class VectorStore(Protocol):
    """Capabilities the request-time code needs from a vector store."""

    def upsert(self, records: list[VectorRecord]) -> int: ...

    def query(self, vector: list[float], top_k: int) -> list[Match]: ...

    def describe_stats(self) -> dict[str, Any]: ...


def get_supabase_client() -> Client:
    """Create and return a Supabase client from settings."""
    return create_client(settings.supabase_url, settings.supabase_key)


class SupabaseVectorStore:
    """Vector store over a pgvector table plus a similarity-search RPC.

    Expected schema::

        create table transcript_vectors (
            id text primary key,
            embedding vector(1536),
            metadata jsonb
        );

    and a ``match_transcript_vectors(query_embedding, match_count)`` function
    returning ``id``, ``metadata`` and ``similarity`` ordered by cosine
    similarity, and a ``transcript_vector_stats()`` function returning
    ``episode_title`` and ``record_count`` per episode.
    """

    def __init__(
        self,
        client: Client | None = None,
        table: str | None = None,
        match_function: str | None = None,
        stats_function: str | None = None,
        dimension: int | None = None,
    ) -> None:
        self._client = client
        self.table = table or settings.vector_table
        self.match_function = match_function or settings.match_function
        self.stats_function = stats_function or settings.stats_function
        self.dimension = dimension or settings.embedding_dimensions

    @property
    def client(self) -> Client:
        # Connect on first use so configuration errors surface per request.
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    def upsert(self, records: list[VectorRecord]) -> int:
        """Insert or overwrite *records* by id in a single call."""
        if not records:
            return 0
        rows = [
            {"id": record.id, "embedding": record.values, "metadata": record.metadata}
            for record in records
        ]
        self.client.table(self.table).upsert(rows, on_conflict="id").execute()
        return len(rows)

    def query(self, vector: list[float], top_k: int) -> list[Match]:
        """Return the *top_k* records closest to *vector*, best first."""
        result = self.client.rpc(
            self.match_function,
            {"query_embedding": vector, "match_count": top_k},
        ).execute()
        # Supabase .data is typed as JSON (broad union); cast to concrete type.
        rows = cast(list[dict[str, Any]], result.data or [])
        return [
            Match(
                id=str(row["id"]),
                score=float(row.get("similarity") or 0.0),
                metadata=row.get("metadata") or {},
            )
            for row in rows
        ]

    def describe_stats(self) -> dict[str, Any]:
        """Aggregate statistics: total vector count and per-episode counts.

        Counting happens in the ``stats_function`` RPC so the result is not
        limited by PostgREST's row cap.
        """
        result = self.client.rpc(self.stats_function, {}).execute()
        rows = cast(list[dict[str, Any]], result.data or [])
        episodes = {row.get("episode_title") or "": int(row["record_count"]) for row in rows}
        total = sum(episodes.values())
        return {
            "totalRecordCount": total,
            "dimension": self.dimension,
            "namespaces": {"": {"recordCount": total}},
            "episodes": episodes,
        }

    def ensure_ready(self) -> bool:
        """Return True if the table is reachable."""
        self.client.table(self.table).select("id").limit(1).execute()
        return True

    def reset(self) -> int:
        """Delete every stored vector and return how many rows were removed."""
        result = self.client.table(self.table).delete().neq("id", "").execute()
        return len(result.data or [])
