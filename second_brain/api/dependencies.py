"""Process-wide client handles, injected into routes with ``Depends``.

Tests replace them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from second_brain.ingestion.embeddings import EmbeddingProvider, OpenAIEmbeddingProvider
from second_brain.ingestion.storage import SupabaseVectorStore, VectorStore


@lru_cache(maxsize=1)
def get_embedding_provider() -> EmbeddingProvider:
    return OpenAIEmbeddingProvider()


@lru_cache(maxsize=1)
def get_vector_store() -> VectorStore:
    return SupabaseVectorStore()
