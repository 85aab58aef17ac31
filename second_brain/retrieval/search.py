"""Semantic search over stored transcript chunks."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from second_brain.config import settings
from second_brain.ingestion.embeddings import EmbeddingProvider, embed_with_fallback
from second_brain.ingestion.storage import Match, VectorStore

logger = logging.getLogger(__name__)


class SearchValidationError(ValueError):
    """Raised when a search request has no usable query."""


def format_match(match: Match) -> dict[str, Any]:
    """Shape a store match into the API's result dict."""
    metadata = match.metadata
    result: dict[str, Any] = {
        "score": match.score,
        "content": metadata.get("content", ""),
        "episodeTitle": metadata.get("episodeTitle", ""),
    }
    if metadata.get("speaker"):
        result["speaker"] = metadata["speaker"]
    if metadata.get("timestamp"):
        result["timestamp"] = metadata["timestamp"]
    return result


async def search_transcripts(
    query: str | None,
    provider: EmbeddingProvider,
    store: VectorStore,
    top_k: int | None = None,
) -> list[dict[str, Any]]:
    """Embed *query* (falling back to hashed embeddings) and return the nearest chunks.

    Raises:
        SearchValidationError: If *query* is empty or blank.
    """
    if not query or not isinstance(query, str) or not query.strip():
        raise SearchValidationError("Query is required")

    top_k = top_k or settings.search_top_k
    logger.info("Searching for: %s", query)

    vector, used_fallback = await embed_with_fallback(provider, query, "query")
    if used_fallback:
        logger.info("Query embedded with fallback embedding")

    matches = await asyncio.to_thread(store.query, vector, top_k)
    return [format_match(m) for m in matches]
